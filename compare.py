#!/usr/bin/env python3

import matplotlib.pyplot as plt

import config

from Trays.Behaviour import Uptake
from Trays.Sweep import GridSpec, prevalence_sensitivity, critical_fraction
from Trays.ResultPlotter import ResultPlotter


def compare_prevalences(uptake=Uptake.THREAT_INCREASING, prevalences=None, seed=None):
    """
    grid sweep for each prevalence, printed as csv

    Returns:
    dict prevalence -> list of BehaviouralSample
    """
    if prevalences is None:
        prevalences = config.prevalences
    if seed is None:
        seed = config.seed
    grid_spec = GridSpec(axis=config.grid_axis, uptake=uptake, threat_floor=config.threat_floor)

    if config.plotting:
        plotter = ResultPlotter()

    results = {}
    if config.output_summary:
        print(f"#{uptake}")
        print("#prevalence,critical_fraction,min_delta_pc,max_delta_pc")
    for prevalence, samples in prevalence_sensitivity(grid_spec, config.disease, prevalences, seed):
        results[prevalence] = samples
        if config.output_summary:
            values = [s.delta_pc for s in samples]
            print(f'{prevalence},{critical_fraction(samples)},{min(values)},{max(values)}')
        if config.plotting:
            plotter.plot_contour(samples, shape=grid_spec.shape, title=f'{uptake} prevalence {prevalence}')
    return results


# main
if __name__ == "__main__":
    # turn off single runs
    config.output_singleruns = False

    # compare both uptake models
    for uptake in (Uptake.THREAT_INCREASING, Uptake.NON_INCREASING):
        compare_prevalences(uptake=uptake)
        print("")

    if config.plotting:
        plt.show()
