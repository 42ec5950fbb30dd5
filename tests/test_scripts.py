"""Tests for the run scripts (simulator, sweep, compare) and the plotter."""

import dataclasses

import pytest

import config
import compare
import simulator
import sweep
from Trays.Behaviour import Uptake
from Trays.ResultPlotter import ResultPlotter
from Trays.Sweep import GridSpec, SampleMode
from Trays.Sweep import sweep as run_grid
from Trays.TraySimulation import simulate, steady_state_fraction


@pytest.fixture
def quiet(monkeypatch):
    monkeypatch.setattr(config, 'plotting', False)
    monkeypatch.setattr(config, 'output_singleruns', False)
    monkeypatch.setattr(config, 'output_summary', False)
    monkeypatch.setattr(config, 'Nsim', 2)
    monkeypatch.setattr(config, 'n_samples', 50)
    monkeypatch.setattr(config, 'simulation', dataclasses.replace(config.simulation, max_steps=300))


class TestConfig:

    def test_defaults(self):
        assert config.simulation.N0 == config.N0
        assert config.simulation.max_steps == config.maxSteps
        assert config.disease.contact_rate == pytest.approx(config.people / config.N0)


class TestSimulator:

    def test_get_performance(self, quiet):
        mean_frac, ss, newcases, reinf = simulator.get_performance(seed=1)
        assert ss == pytest.approx(steady_state_fraction(config.simulation))
        assert 0.0 <= mean_frac <= 1.0
        assert newcases >= 0
        assert reinf >= 0

    def test_get_performance_prints(self, quiet, monkeypatch, capsys):
        monkeypatch.setattr(config, 'output_summary', True)
        simulator.get_performance(seed=1)
        out = capsys.readouterr().out
        assert 'steady state[%]' in out

    def test_run_sim(self, quiet):
        trajectory, ss = simulator.run_sim(rng=3)
        assert len(trajectory) == config.simulation.max_steps + 1
        assert ss == pytest.approx(steady_state_fraction(config.simulation))


class TestSweepScripts:

    @pytest.mark.parametrize('key', sorted(sweep.myscenarios))
    def test_run_sweep(self, quiet, key):
        scenario = sweep.myscenarios[key]
        samples = sweep.run_sweep(scenario, seed=1)
        if scenario['mode'] is SampleMode.FIXED_GRID:
            assert len(samples) == 121
        else:
            assert len(samples) == config.n_samples

    def test_run_sweep_csv(self, quiet, monkeypatch, capsys):
        monkeypatch.setattr(config, 'output_singleruns', True)
        sweep.run_sweep(sweep.myscenarios[3], seed=1)
        lines = capsys.readouterr().out.splitlines()
        assert lines[1].startswith('#threat,efficacy')
        assert len(lines) == 2 + 121

    def test_compare_prevalences(self, quiet):
        results = compare.compare_prevalences(uptake=Uptake.NON_INCREASING, prevalences=(0.5, 0.01), seed=1)
        assert list(results) == [0.5, 0.01]
        assert all(len(samples) == 121 for samples in results.values())


class TestResultPlotter:

    def test_trajectory(self, reference_config):
        tr = simulate(reference_config, rng=1)
        ax = ResultPlotter().plot_trajectory(tr, steady_state=steady_state_fraction(reference_config), title='ref')
        assert ax.get_title() == 'Tray contamination: ref'

    def test_contour_and_scatter(self, disease):
        samples = list(run_grid(GridSpec(), disease, SampleMode.FIXED_GRID, rng=0))
        plotter = ResultPlotter()
        assert plotter.plot_contour(samples, title='grid').get_xlabel() == r'threat $\tau$'
        assert plotter.plot_scatter(samples, title='grid').get_ylabel() == r'$\omega$ (use after)'

    def test_save(self, reference_config, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        tr = simulate(reference_config, rng=1)
        ResultPlotter(save=True).plot_trajectory(tr, title='first run')
        assert (tmp_path / 'fig_trajectory_first_run.pdf').exists()

    def test_scripts_plot(self, quiet, monkeypatch):
        monkeypatch.setattr(config, 'plotting', True)
        monkeypatch.setattr('matplotlib.pyplot.show', lambda: None)
        simulator.get_performance(seed=1)
        sweep.run_sweep(sweep.myscenarios[4], seed=1)
        compare.compare_prevalences(prevalences=(0.1,), seed=1)
