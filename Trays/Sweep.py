#!/usr/bin/env python3

from dataclasses import dataclass
from enum import Enum, auto
import math
import numpy as np
from scipy import stats

from Trays.Parameters import DiseaseParameters, InvalidConfig, check_probability
from Trays.Behaviour import Uptake, behavioural_sample, evaluate
from Trays.TraySimulation import get_rng


# threat/efficacy axis of the fixed grid: 0.001, 0.1, 0.2, ..., 1.0
GRID_AXIS = (0.001,) + tuple(round(0.1 * i, 1) for i in range(1, 11))

# prevalences for the sensitivity analysis
PREVALENCES = (0.9, 0.5, 0.1, 0.01, 0.001, 0.0001)


class SampleMode(Enum):
    """
    How sweep points are generated.

    RANDOM_BEHAVIOUR -- uniform threat and efficacy
    RANDOM_UPTAKE -- uniform usage before and after, independent of each other
    FIXED_GRID -- threat x efficacy over the grid axis
    """
    RANDOM_BEHAVIOUR = auto()
    RANDOM_UPTAKE = auto()
    FIXED_GRID = auto()


@dataclass(frozen=True)
class GridSpec:
    n_samples: int = 1000
    axis: tuple = GRID_AXIS
    uptake: Uptake = Uptake.THREAT_INCREASING
    threat_floor: float = 0.001

    def __post_init__(self):
        if self.n_samples < 0:
            raise InvalidConfig(f'n_samples must be >= 0, got {self.n_samples}')
        if not (0 < self.threat_floor <= 1):
            raise InvalidConfig(f'threat_floor must be in (0,1], got {self.threat_floor}')
        if len(self.axis) == 0:
            raise InvalidConfig('grid axis is empty')
        for value in self.axis:
            check_probability('grid axis value', value)

    @property
    def shape(self):
        return (len(self.axis), len(self.axis))


def sweep(grid_spec: GridSpec, disease: DiseaseParameters, sample_mode: SampleMode, rng=None):
    """
    Lazily evaluates the sensitivity formulas over a sample or grid.

    Arguments:
    grid_spec -- sample size, grid axis and uptake model (GridSpec)
    disease -- disease constants (DiseaseParameters)
    sample_mode -- point generation (SampleMode)
    rng -- seed or numpy Generator

    Yields:
    BehaviouralSample in generation order (threat outer, efficacy inner on the grid)
    """
    rng = get_rng(rng)
    if sample_mode is SampleMode.FIXED_GRID:
        for threat in grid_spec.axis:
            for efficacy in grid_spec.axis:
                yield behavioural_sample(disease, threat, efficacy, grid_spec.uptake, rng)
    elif sample_mode is SampleMode.RANDOM_BEHAVIOUR:
        floor = grid_spec.threat_floor
        for _ in range(grid_spec.n_samples):
            u_threat, efficacy = stats.uniform.rvs(size=2, random_state=rng)
            threat = floor + (1 - floor) * u_threat
            yield behavioural_sample(disease, threat, efficacy, grid_spec.uptake, rng)
    elif sample_mode is SampleMode.RANDOM_UPTAKE:
        for _ in range(grid_spec.n_samples):
            useprior, usepost = stats.uniform.rvs(size=2, random_state=rng)
            yield evaluate(disease, float(useprior), float(usepost))
    else:
        raise InvalidConfig(f'unknown sample mode {sample_mode}')


def grid_columns(samples, x='threat', y='efficacy', z='delta_pc', shape=None):
    """
    Returns the fields <x>, <y>, <z> of the samples as 2d arrays for contour plots.

    Arguments:
    samples -- sweep rows in grid order (list of BehaviouralSample)
    shape -- grid shape, square if None (tuple)
    """
    samples = list(samples)
    if shape is None:
        side = math.isqrt(len(samples))
        shape = (side, side)
    if shape[0] * shape[1] != len(samples):
        raise InvalidConfig(f'{len(samples)} samples do not fit a {shape} grid')
    columns = []
    for field in (x, y, z):
        columns += [np.array([getattr(s, field) for s in samples], dtype=float).reshape(shape)]
    return tuple(columns)


def critical_fraction(samples):
    """
    Fraction of samples where sanitiser before the trays is better (delta_pc < 0).
    """
    samples = list(samples)
    if not samples:
        return 0.0
    return sum(1 for s in samples if s.critical) / len(samples)


def prevalence_sensitivity(grid_spec: GridSpec, disease: DiseaseParameters,
                           prevalences=PREVALENCES, rng=None,
                           sample_mode=SampleMode.FIXED_GRID):
    """
    Repeats the sweep for each prevalence.

    Yields:
    (prevalence, list of BehaviouralSample)
    """
    rng = get_rng(rng)
    for prevalence in prevalences:
        d = disease.with_prevalence(prevalence)
        yield prevalence, list(sweep(grid_spec, d, sample_mode, rng))
