#!/usr/bin/env python3

from dataclasses import dataclass
import numpy as np
from scipy import stats

from Trays.Parameters import SimulationConfig, InvalidConfig


class TrayState:

    def __init__(self, capacity: int, contaminated: int = 0):
        """
        Creates the state of a screening lane.

        Arguments:
        capacity -- number of trays in the lane (int)
        contaminated -- contaminated trays at t=0 (int)
        """
        self.t: int = 0
        self.capacity = capacity
        self.contaminated: int = contaminated

    def __str__(self):
        return f'TrayState(t={self.t}, T={self.contaminated}/{self.capacity})'

    def apply(self, births, deaths):
        """
        Performs one step: <births> new contaminations and <deaths>
        decontaminations, clamped to the free and contaminated trays.

        Arguments:
        births -- newly contaminated trays (int)
        deaths -- decontaminated trays (int)
        """
        births = min(int(births), self.capacity - self.contaminated)
        deaths = min(int(deaths), self.contaminated)
        self.contaminated += births - deaths
        self.t += 1
        return self.contaminated


@dataclass(frozen=True)
class Trajectory:
    """
    Time series of one run, index i corresponds to time i*dt.
    """
    time: np.ndarray
    contaminated: np.ndarray
    cases: np.ndarray
    first_decon_fail: np.ndarray
    alpha: np.ndarray
    second_decon_fail: np.ndarray
    new_case: np.ndarray
    reinf_case: np.ndarray
    capacity: int

    def __post_init__(self):
        for name in self.columns():
            getattr(self, name).setflags(write=False)

    def __len__(self):
        return len(self.time)

    @staticmethod
    def columns():
        return ('time', 'contaminated', 'cases', 'first_decon_fail', 'alpha',
                'second_decon_fail', 'new_case', 'reinf_case')

    @property
    def contaminated_fraction(self):
        return self.contaminated / self.capacity

    def mean_contaminated_fraction(self, burnin: int = 0):
        """
        Mean fraction of contaminated trays, skipping the first <burnin> steps.
        """
        return float(np.mean(self.contaminated_fraction[burnin:]))

    def as_table(self):
        return {name: getattr(self, name) for name in self.columns()}


def get_rng(rng=None):
    """
    Returns a numpy Generator from a seed, None or an existing Generator.
    """
    return np.random.default_rng(rng)


def steady_state_fraction(config: SimulationConfig):
    """
    Closed-form steady state of the contaminated tray fraction.
    """
    inflow = (1 - config.use_before) * config.prob_trans * config.prev * config.people
    total = inflow + config.N0 * config.rec_rate
    if total == 0:
        return 0.0
    return inflow / total


def simulate(config: SimulationConfig, rng=None):
    """
    Tau-leaping simulation of the number of contaminated trays.

    Arguments:
    config -- run parameters (SimulationConfig)
    rng -- seed or numpy Generator

    Returns:
    Trajectory
    """
    rng = get_rng(rng)
    n = config.max_steps + 1

    # -- arrivals: infectious customers and those skipping the first sanitiser
    cases = stats.binom.rvs(config.people, config.prev * config.dt, size=n, random_state=rng)
    first_decon_fail = stats.binom.rvs(cases, 1 - config.use_before, random_state=rng)

    # -- birth death process
    state = TrayState(capacity=config.N0, contaminated=config.T0)
    contaminated = np.zeros(n, dtype=int)
    contaminated[0] = state.contaminated
    for i in range(1, n):
        T = state.contaminated
        r1 = config.prob_trans * first_decon_fail[i-1] * (1 - T / config.N0)
        r2 = config.rec_rate * T * config.dt
        births = stats.poisson.rvs(max(r1, 0.0), random_state=rng)
        deaths = stats.poisson.rvs(max(r2, 0.0), random_state=rng)
        contaminated[i] = state.apply(births, deaths)

    # -- exposure of customers passing the lane
    alpha = config.prob_trans * contaminated / config.N0 * config.trays_per_customer
    p_newcase = np.clip((1 - config.use_after) * (1 - config.prev) * alpha * config.dt, 0, 1)
    p_reinf = np.clip((1 - config.use_after) * alpha, 0, 1)
    second_decon_fail = stats.binom.rvs(first_decon_fail, 1 - config.use_after, random_state=rng)
    new_case = stats.binom.rvs(config.people, p_newcase, random_state=rng)
    reinf_case = stats.binom.rvs(cases - first_decon_fail, p_reinf, random_state=rng)

    return Trajectory(time=np.arange(n) * config.dt,
                      contaminated=contaminated,
                      cases=np.asarray(cases),
                      first_decon_fail=np.asarray(first_decon_fail),
                      alpha=alpha,
                      second_decon_fail=np.asarray(second_decon_fail),
                      new_case=np.asarray(new_case),
                      reinf_case=np.asarray(reinf_case),
                      capacity=config.N0)


def run_many(config: SimulationConfig, n_runs: int, seed=None):
    """
    Runs <n_runs> independent simulations from one seed.

    Returns:
    (trajectories, summary) where summary holds the per-step means of the
    contaminated fraction, new cases and reinfections.
    """
    if n_runs < 1:
        raise InvalidConfig(f'n_runs must be >= 1, got {n_runs}')
    rng = get_rng(seed)
    trajectories = [simulate(config, rng) for _ in range(n_runs)]
    summary = {
        'contaminated_fraction': np.mean([tr.contaminated_fraction for tr in trajectories], axis=0),
        'new_case': np.mean([tr.new_case for tr in trajectories], axis=0),
        'reinf_case': np.mean([tr.reinf_case for tr in trajectories], axis=0),
    }
    return trajectories, summary
