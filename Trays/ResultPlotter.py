#!/usr/bin/env python3

import numpy as np
import matplotlib.pyplot as plt

from Trays.TraySimulation import Trajectory
from Trays.Sweep import grid_columns

COLOR_AFTER = (0.0, 0.6, 0.0)
COLOR_BEFORE = (0.6, 0.0, 0.0)

LABELS = {
    'threat': r'threat $\tau$',
    'efficacy': r'efficacy $\epsilon$',
    'k': '$k$',
    'useprior': r'$\rho$ (use before)',
    'usepost': r'$\omega$ (use after)',
    'pc': '$P_C$',
    'delta_pc': r'$\Delta P_C$',
    'delta_pc8': r'$\Delta P_C^{(8)}$',
}


class ResultPlotter(object):
    """
    Renders result tables: trajectories and sweep samples.
    Does not compute anything itself.
    """

    def __init__(self, save: bool = False):
        self.save = save

    def __savefig__(self, fig, kind: str, title: str):
        if self.save:
            name = title.replace(' ', '_')
            fig.savefig(f'fig_{kind}_{name}.pdf')

    def plot_trajectory(self, trajectory: Trajectory, steady_state=None, title: str = '', alpha: float = 1.0, ax=None):
        """
        Plots the contaminated tray fraction over time.

        Arguments:
        trajectory -- simulated run (Trajectory)
        steady_state -- closed-form steady state fraction, drawn as line (float)
        """
        if ax is None:
            fig = plt.figure()
            ax = plt.subplot(111)
        else:
            fig = ax.figure
        ax.plot(trajectory.time, trajectory.contaminated_fraction, 'b-', alpha=alpha, label='simulated')
        ax.axhline(trajectory.mean_contaminated_fraction(), color='b', linestyle=':', label='simulated mean')
        if steady_state is not None:
            ax.axhline(steady_state, color='k', linestyle='--', label='steady state')
        ax.set_xlabel('time [days]')
        ax.set_ylabel('contaminated trays [fraction]')
        ax.set_ybound(lower=0)
        ax.set_title(f'Tray contamination: {title}')
        ax.legend(shadow=False, frameon=False)
        self.__savefig__(fig, 'trajectory', title)
        return ax

    def plot_contour(self, samples, x='threat', y='efficacy', z='delta_pc', title: str = '', shape=None):
        """
        Contour of <z> over a grid sweep, the zero level is drawn bold.
        """
        X, Y, Z = grid_columns(samples, x=x, y=y, z=z, shape=shape)
        fig = plt.figure()
        ax = plt.subplot(111)
        cs = ax.contourf(X, Y, Z, levels=20, cmap='RdYlGn')
        fig.colorbar(cs, ax=ax, label=LABELS.get(z, z))
        if np.nanmin(Z) < 0 < np.nanmax(Z):
            ax.contour(X, Y, Z, levels=[0], colors='k', linewidths=2)
        ax.set_xlabel(LABELS.get(x, x))
        ax.set_ylabel(LABELS.get(y, y))
        ax.set_title(title)
        self.__savefig__(fig, 'contour', title)
        return ax

    def plot_scatter(self, samples, x='useprior', y='usepost', z='delta_pc', title: str = ''):
        """
        Scatter of sweep samples, coloured by the sign of <z>.
        """
        samples = list(samples)
        xs = np.array([getattr(s, x) for s in samples], dtype=float)
        ys = np.array([getattr(s, y) for s in samples], dtype=float)
        zs = np.array([getattr(s, z) for s in samples], dtype=float)
        fig = plt.figure()
        ax = plt.subplot(111)
        after = zs >= 0
        ax.plot(xs[after], ys[after], '.', color=COLOR_AFTER, alpha=0.6, label='after better')
        ax.plot(xs[~after], ys[~after], '.', color=COLOR_BEFORE, alpha=0.6, label='before better')
        ax.set_xbound(lower=0, upper=1)
        ax.set_ybound(lower=0, upper=1)
        ax.set_xlabel(LABELS.get(x, x))
        ax.set_ylabel(LABELS.get(y, y))
        ax.set_title(title)
        ax.legend(shadow=False, frameon=False)
        self.__savefig__(fig, 'scatter', title)
        return ax
