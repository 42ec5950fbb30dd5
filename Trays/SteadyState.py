#!/usr/bin/env python3

import numpy as np

from Trays.Parameters import DiseaseParameters, InvalidConfig, SingularParameter


# ---- closed-form steady state and sensitivity --------------------------------
#
# rho   -- P(sanitiser used before tray contact)
# omega -- P(sanitiser used after tray contact)
#
# All functions accept floats or numpy arrays for rho and omega.


def _check_usage(name, value):
    value = np.asarray(value, dtype=float)
    if np.any(np.isnan(value)) or np.any(value < 0) or np.any(value > 1):
        raise InvalidConfig(f'{name} must be in [0,1]')
    return value


def _tray_denominator(p, rho):
    # 1 - p*rho vanishes for fully contaminated trays (p=1, no recovery) and rho=1
    denom = 1 - p * rho
    if np.any(denom == 0):
        raise SingularParameter('1 - p*rho is zero (p=1 and rho=1)')
    return denom


def _result(value):
    if np.ndim(value) == 0:
        return float(value)
    return value


def transmission_rate(d: DiseaseParameters):
    """
    Rate at which a tray gets contaminated by infectious customers.
    """
    return d.prob_trans * d.contact_rate * d.prevalence


def prob_tray_contaminated(d: DiseaseParameters):
    """
    Steady-state probability that a tray is contaminated.
    """
    transmission = transmission_rate(d)
    return transmission / (transmission + d.recovery_rate)


def baseline_contamination(d: DiseaseParameters):
    """
    PC00: P(customer contaminated) without any sanitiser use, including the
    contamination picked up from the trays.
    """
    return d.prevalence + (1 - d.prevalence) * d.trays_per_customer * d.prob_trans * prob_tray_contaminated(d)


def eta(d: DiseaseParameters):
    pc00 = baseline_contamination(d)
    if pc00 == 0:
        # no infectious customers, no contaminated trays
        return 0.0
    return d.prevalence / pc00 * (1 - d.trays_per_customer * d.prob_trans)


def contamination_probability(d: DiseaseParameters, rho, omega):
    """
    P(customer contaminated) for sanitiser usage <rho> before and <omega>
    after the trays (equation 4).
    """
    rho = _check_usage('rho', rho)
    omega = _check_usage('omega', omega)
    p = prob_tray_contaminated(d)
    e = eta(d)
    pc = (1 - rho) * (1 - omega) * (1 - p * rho * e) * baseline_contamination(d) / _tray_denominator(p, rho)
    return _result(pc)


def delta_pc(d: DiseaseParameters, rho, omega):
    """
    Change in contamination probability (equation 5).

    Positive values: sanitiser after the trays is more effective than before.
    """
    rho = _check_usage('rho', rho)
    omega = _check_usage('omega', omega)
    p = prob_tray_contaminated(d)
    e = eta(d)
    return _result((1 - rho) * (1 - p * rho * e) / _tray_denominator(p, rho) - (1 - omega))


def delta_pc8(d: DiseaseParameters, rho, omega):
    """
    Change in contamination probability, rearranged (equation 8).
    """
    rho = _check_usage('rho', rho)
    omega = _check_usage('omega', omega)
    p = prob_tray_contaminated(d)
    e = eta(d)
    return _result(omega - rho + rho * p * (1 - e) * (1 - rho) / _tray_denominator(p, rho))


def critical_region(d: DiseaseParameters, rho, omega):
    """
    True where sanitiser before the trays is better (delta_pc < 0, equation 12).
    """
    out = np.asarray(delta_pc(d, rho, omega)) < 0
    if out.ndim == 0:
        return bool(out)
    return out
