#!/usr/bin/env python3

import matplotlib.pyplot as plt
import numpy as np

import config

from Trays.TraySimulation import simulate, run_many, steady_state_fraction
from Trays.ResultPlotter import ResultPlotter


def run_sim(simulation=None, rng=None):
    """
    run a single simulation
    """
    if simulation is None:
        simulation = config.simulation
    trajectory = simulate(simulation, rng)
    return trajectory, steady_state_fraction(simulation)


def get_performance(simulation=None, seed=None):
    """
    run several simulations with the specified parameters.

    Arguments:
    Parameters as 'simulation' (SimulationConfig), defaults to config.simulation

    Returns:
    Performance as tuple
    """
    if simulation is None:
        simulation = config.simulation
    if seed is None:
        seed = config.seed

    trajectories, summary = run_many(simulation, n_runs=config.Nsim, seed=seed)
    ss = steady_state_fraction(simulation)

    overall_mean_frac = []
    overall_max_frac = []
    overall_newcases = []
    overall_reinf = []

    # plots
    if config.plotting:
        plotter = ResultPlotter()
        plt.figure()
        ax = plt.subplot(111)

    for k, trajectory in enumerate(trajectories):
        mean_frac = trajectory.mean_contaminated_fraction()
        # log
        overall_mean_frac += [mean_frac]
        overall_max_frac += [np.max(trajectory.contaminated_fraction)]
        overall_newcases += [np.sum(trajectory.new_case)]
        overall_reinf += [np.sum(trajectory.reinf_case)]
        # print
        if config.output_singleruns:
            print('')
            print(f'contaminated[%]= {mean_frac*100:12.2f}')
            print(f'max contaminated[%]= {overall_max_frac[-1]*100:8.2f}')
            print(f'new cases= {overall_newcases[-1]:18d}')
            print(f'reinfections= {overall_reinf[-1]:15d}')
        if config.plotting:
            # bold first plot
            alpha = 1.0 if k == 0 else 0.1
            ax.plot(trajectory.time, trajectory.contaminated_fraction, 'b-', alpha=alpha)

    # overall print
    if config.output_summary:
        print('------------ parameters ------------------------------')
        print(simulation)
        print('------------ summary ---------------------------------')
        print(f'avg contaminated[%]= {np.average(overall_mean_frac)*100:9.2f},  [trays] = {np.average(overall_mean_frac)*simulation.N0:6.2f}')
        print(f'steady state[%]= {ss*100:13.2f},  [trays] = {ss*simulation.N0:6.2f}')
        print(f'avg new cases= {np.average(overall_newcases):15.2f}')
        print(f'avg reinfections= {np.average(overall_reinf):12.2f}')

    # overall plot
    if config.plotting:
        ax.plot(trajectories[0].time, summary['contaminated_fraction'], 'k-', label='mean over runs')
        ax.axhline(ss, color='r', linestyle='--', label='steady state')
        ax.set_xlabel('time [days]')
        ax.set_ylabel('contaminated trays [fraction]')
        ax.set_xbound(lower=0, upper=trajectories[0].time[-1])
        ax.set_ybound(lower=0)
        ax.legend(shadow=False, ncol=1, frameon=False)
        plotter.plot_trajectory(trajectories[0], steady_state=ss, title='first run')
        plt.show()

    # return tuple (avg contaminated fraction, steady state, avg new cases, avg reinfections)
    return (np.average(overall_mean_frac),
            ss,
            np.average(overall_newcases),
            np.average(overall_reinf))


# main
if __name__ == "__main__":
    perf = get_performance()
    print(perf)
