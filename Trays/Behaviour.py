#!/usr/bin/env python3

from dataclasses import dataclass
from enum import Enum, auto
import math
from scipy import stats

from Trays.Parameters import DiseaseParameters, InvalidConfig, SingularParameter, check_probability
from Trays import SteadyState


class Uptake(Enum):
    """
    How perceived threat and efficacy (EPPM) translate into sanitiser use.

    THREAT_INCREASING
    NON_INCREASING
    """
    THREAT_INCREASING = auto()
    NON_INCREASING = auto()

    def __str__(self):
        if self is Uptake.THREAT_INCREASING:
            return 'threat-increasing'
        elif self is Uptake.NON_INCREASING:
            return 'non-increasing'
        else:
            raise ValueError('Unknown Uptake')


@dataclass(frozen=True)
class BehaviouralSample:
    """
    One evaluated point of a parameter sweep.

    threat, efficacy and k are nan if the usages were drawn directly.
    clipped is set if an uptake value had to be moved into [0,1].
    """
    threat: float
    efficacy: float
    k: float
    useprior: float
    usepost: float
    pc: float
    delta_pc: float
    delta_pc8: float
    clipped: bool = False

    @property
    def critical(self):
        return self.delta_pc < 0


def draw_k(threat, rng):
    """
    Draws the usage increase factor k ~ U[1, 1/threat].

    Arguments:
    threat -- perceived threat, > 0 (float)
    rng -- numpy Generator
    """
    if not (threat > 0):
        raise SingularParameter(f'threat must be > 0 to draw k from [1, 1/threat], got {threat}')
    u = stats.uniform.rvs(random_state=rng)
    return float(1 + (1/threat - 1) * u)


def threat_increasing(threat, efficacy, k):
    """
    Returns (useprior, usepost) when usage grows with the threat after the trays.
    """
    return efficacy * threat, k * threat * efficacy


def non_increasing(threat, efficacy, k):
    """
    Returns (useprior, usepost) when high threat does not increase usage.
    """
    threat_post = k * threat
    return (efficacy * threat * (efficacy + 1 - threat),
            efficacy * threat_post * (efficacy + 1 - threat_post))


UPTAKE_FUNCTIONS = {
    Uptake.THREAT_INCREASING: threat_increasing,
    Uptake.NON_INCREASING: non_increasing,
}


def _clip(value, tol=1e-12):
    # rounding in k*threat may leave values a hair outside [0,1]
    clipped = value < -tol or value > 1 + tol
    return min(max(value, 0.0), 1.0), clipped


def evaluate(d: DiseaseParameters, useprior, usepost,
             threat=math.nan, efficacy=math.nan, k=math.nan, clipped=False):
    """
    Evaluates the sensitivity formulas at one pair of usages.
    """
    return BehaviouralSample(threat=threat, efficacy=efficacy, k=k,
                             useprior=useprior, usepost=usepost,
                             pc=SteadyState.contamination_probability(d, useprior, usepost),
                             delta_pc=SteadyState.delta_pc(d, useprior, usepost),
                             delta_pc8=SteadyState.delta_pc8(d, useprior, usepost),
                             clipped=clipped)


def behavioural_sample(d: DiseaseParameters, threat, efficacy, uptake: Uptake, rng):
    """
    Derives k and both usages from threat and efficacy and evaluates them.

    Arguments:
    d -- disease constants (DiseaseParameters)
    threat -- perceived threat (float)
    efficacy -- perceived efficacy (float)
    uptake -- uptake model (Uptake)
    rng -- numpy Generator used to draw k
    """
    check_probability('threat', threat)
    check_probability('efficacy', efficacy)
    if uptake not in UPTAKE_FUNCTIONS:
        raise InvalidConfig(f'unknown uptake model {uptake}')
    k = draw_k(threat, rng)
    useprior, usepost = UPTAKE_FUNCTIONS[uptake](threat, efficacy, k)
    useprior, clipped_prior = _clip(useprior)
    usepost, clipped_post = _clip(usepost)
    return evaluate(d, useprior, usepost, threat=threat, efficacy=efficacy, k=k,
                    clipped=clipped_prior or clipped_post)
