#!/usr/bin/env python3

from dataclasses import dataclass, replace
import math
import numbers


# trays a customer fills at the screening lane
TRAYS_PER_CUSTOMER = 2


class InvalidConfig(ValueError):
    """
    A parameter lies outside of its domain.
    """
    pass


class SingularParameter(ValueError):
    """
    A parameter hits a singularity of the model (e.g. 1/threat with threat <= 0).
    """
    pass


def check_probability(name, value):
    """
    Raises InvalidConfig if <value> is not a probability.

    Arguments:
    name -- parameter name for the message (str)
    value -- value to check (float)
    """
    if not (0.0 <= value <= 1.0):
        raise InvalidConfig(f'{name} must be in [0,1], got {value}')


def check_nonnegative(name, value):
    """
    Raises InvalidConfig if <value> is negative or nan.

    Arguments:
    name -- parameter name for the message (str)
    value -- value to check (float)
    """
    if not (value >= 0):
        raise InvalidConfig(f'{name} must be >= 0, got {value}')


def check_count(name, value):
    """
    Raises InvalidConfig if <value> is not an integer.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidConfig(f'{name} must be an integer, got {value!r}')


@dataclass(frozen=True)
class SimulationConfig:
    """
    Parameters of a single tray contamination run.

    dt -- time step [days]
    max_steps -- number of steps after the initial state
    N0 -- number of trays in the lane
    T0 -- contaminated trays at t=0
    prob_trans -- P(transmission) per contact
    people -- customers per day
    use_before -- P(customer sanitises before touching the trays)
    use_after -- P(customer sanitises after touching the trays)
    prev -- prevalence among arriving customers
    rec_rate -- decontamination rate per tray and day
    """
    dt: float = 0.1
    max_steps: int = 10000
    N0: int = 40
    T0: int = 0
    prob_trans: float = 1/15
    people: int = 2000
    use_before: float = 0.0
    use_after: float = 0.0
    prev: float = 0.01
    rec_rate: float = 1.0
    trays_per_customer: int = TRAYS_PER_CUSTOMER

    def __post_init__(self):
        for name in ('N0', 'T0', 'max_steps', 'people', 'trays_per_customer'):
            check_count(name, getattr(self, name))
        if not (self.N0 > 0):
            raise InvalidConfig(f'N0 must be > 0, got {self.N0}')
        if not (self.dt > 0):
            raise InvalidConfig(f'dt must be > 0, got {self.dt}')
        if not (self.max_steps >= 1):
            raise InvalidConfig(f'max_steps must be >= 1, got {self.max_steps}')
        if not (0 <= self.T0 <= self.N0):
            raise InvalidConfig(f'T0 must be in [0, N0={self.N0}], got {self.T0}')
        check_nonnegative('people', self.people)
        check_nonnegative('rec_rate', self.rec_rate)
        for name in ('prob_trans', 'use_before', 'use_after', 'prev'):
            check_probability(name, getattr(self, name))
        # people*prev*dt is the per-step binomial probability times people
        check_probability('prev*dt', self.prev * self.dt)

    @property
    def contact_rate(self):
        """
        Customers per tray and day.
        """
        return self.people / self.N0


@dataclass(frozen=True)
class DiseaseParameters:
    """
    Fixed disease constants shared by the closed-form formulas.
    """
    contact_rate: float
    prob_trans: float
    prevalence: float
    recovery_rate: float
    trays_per_customer: int = TRAYS_PER_CUSTOMER

    def __post_init__(self):
        check_nonnegative('contact_rate', self.contact_rate)
        check_nonnegative('recovery_rate', self.recovery_rate)
        check_probability('prob_trans', self.prob_trans)
        check_probability('prevalence', self.prevalence)
        if self.trays_per_customer < 0:
            raise InvalidConfig(f'trays_per_customer must be >= 0, got {self.trays_per_customer}')
        transmission = self.prob_trans * self.contact_rate * self.prevalence
        if math.isclose(transmission + self.recovery_rate, 0.0):
            raise InvalidConfig('transmission and recovery rate are both zero')

    @classmethod
    def from_simulation(cls, config: SimulationConfig):
        """
        Disease constants matching a simulation run.

        Arguments:
        config -- run parameters (SimulationConfig)
        """
        return cls(contact_rate=config.contact_rate,
                   prob_trans=config.prob_trans,
                   prevalence=config.prev,
                   recovery_rate=config.rec_rate,
                   trays_per_customer=config.trays_per_customer)

    def with_prevalence(self, prevalence):
        return replace(self, prevalence=prevalence)
