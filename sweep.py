#!/usr/bin/env python3

import matplotlib.pyplot as plt

import config

from Trays.Behaviour import Uptake
from Trays.Sweep import GridSpec, SampleMode, sweep, critical_fraction
from Trays.ResultPlotter import ResultPlotter

# scenarios:
myscenarios = {}
myscenarios[0] = {
    'short': 'Random uptake',
    'mode': SampleMode.RANDOM_UPTAKE,
    'uptake': Uptake.THREAT_INCREASING,         # unused, usages drawn directly
}
myscenarios[1] = {
    'short': 'Threat increasing (random)',
    'mode': SampleMode.RANDOM_BEHAVIOUR,
    'uptake': Uptake.THREAT_INCREASING,
}
myscenarios[2] = {
    'short': 'Non increasing (random)',
    'mode': SampleMode.RANDOM_BEHAVIOUR,
    'uptake': Uptake.NON_INCREASING,
}
myscenarios[3] = {
    'short': 'Threat increasing (grid)',
    'mode': SampleMode.FIXED_GRID,
    'uptake': Uptake.THREAT_INCREASING,
}
myscenarios[4] = {
    'short': 'Non increasing (grid)',
    'mode': SampleMode.FIXED_GRID,
    'uptake': Uptake.NON_INCREASING,
}


def run_sweep(scenario, disease=None, seed=None):
    """
    run the sweep of a scenario and print it as csv

    Returns:
    list of BehaviouralSample
    """
    if disease is None:
        disease = config.disease
    if seed is None:
        seed = config.seed
    grid_spec = GridSpec(n_samples=config.n_samples, axis=config.grid_axis,
                         uptake=scenario['uptake'], threat_floor=config.threat_floor)
    samples = list(sweep(grid_spec, disease, scenario['mode'], seed))

    if config.output_singleruns:
        print(f"#{scenario['short']}")
        print("#threat,efficacy,k,useprior,usepost,pc,delta_pc,delta_pc8,clipped")
        for s in samples:
            print(f'{s.threat},{s.efficacy},{s.k},{s.useprior},{s.usepost},{s.pc},{s.delta_pc},{s.delta_pc8},{int(s.clipped)}')
    if config.output_summary:
        print(f"#{scenario['short']}: {len(samples)} samples, before better in {critical_fraction(samples)*100:.2f}%")

    if config.plotting:
        plotter = ResultPlotter()
        if scenario['mode'] is SampleMode.FIXED_GRID:
            plotter.plot_contour(samples, shape=grid_spec.shape, title=scenario['short'])
        elif scenario['mode'] is SampleMode.RANDOM_UPTAKE:
            plotter.plot_scatter(samples, title=scenario['short'])
        else:
            plotter.plot_scatter(samples, x='threat', y='efficacy', title=scenario['short'])

    return samples


# main
if __name__ == "__main__":
    # turn off single runs
    config.output_singleruns = False

    for scenario in myscenarios.values():
        run_sweep(scenario)

    if config.plotting:
        plt.show()
