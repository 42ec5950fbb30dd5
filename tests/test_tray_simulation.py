"""Tests for Trays.TraySimulation: tau-leaping tray contamination."""

import dataclasses

import numpy as np
import pytest

from Trays.Parameters import DiseaseParameters, InvalidConfig, SimulationConfig
from Trays.SteadyState import prob_tray_contaminated
from Trays.TraySimulation import (
    Trajectory,
    TrayState,
    run_many,
    simulate,
    steady_state_fraction,
)


INTEGER_COLUMNS = ('contaminated', 'cases', 'first_decon_fail',
                   'second_decon_fail', 'new_case', 'reinf_case')


class TestTrayState:

    def test_births_clamped_to_free_trays(self):
        state = TrayState(capacity=5, contaminated=3)
        assert state.apply(births=10, deaths=0) == 5
        assert state.t == 1

    def test_deaths_clamped_to_contaminated_trays(self):
        state = TrayState(capacity=5, contaminated=2)
        assert state.apply(births=0, deaths=10) == 0

    def test_regular_step(self):
        state = TrayState(capacity=10, contaminated=4)
        assert state.apply(births=3, deaths=2) == 5


class TestSimulate:

    def test_length_and_time(self, reference_config):
        tr = simulate(reference_config, rng=1)
        assert isinstance(tr, Trajectory)
        assert len(tr) == reference_config.max_steps + 1
        assert tr.time[0] == 0.0
        assert tr.time[1] == pytest.approx(reference_config.dt)
        assert tr.contaminated[0] == reference_config.T0

    def test_bounds_under_heavy_load(self):
        """Huge Poisson draws never leave [0, N0]."""
        cfg = SimulationConfig(dt=0.1, max_steps=2000, N0=5, T0=5, prob_trans=1.0,
                               people=2000, prev=0.5, rec_rate=5.0)
        tr = simulate(cfg, rng=3)
        assert np.all(tr.contaminated >= 0)
        assert np.all(tr.contaminated <= cfg.N0)
        # saturated lane
        assert tr.contaminated.max() == cfg.N0

    def test_bounds_reference(self, reference_config):
        tr = simulate(reference_config, rng=4)
        assert np.all((tr.contaminated >= 0) & (tr.contaminated <= reference_config.N0))

    def test_deterministic_with_seed(self, reference_config):
        tr1 = simulate(reference_config, rng=123)
        tr2 = simulate(reference_config, rng=123)
        for name in INTEGER_COLUMNS:
            assert np.array_equal(getattr(tr1, name), getattr(tr2, name))

    def test_generator_accepted(self, reference_config):
        tr1 = simulate(reference_config, rng=np.random.default_rng(5))
        tr2 = simulate(reference_config, rng=np.random.default_rng(5))
        assert np.array_equal(tr1.contaminated, tr2.contaminated)

    def test_nesting_of_counts(self, reference_config):
        tr = simulate(reference_config, rng=6)
        assert np.all(tr.first_decon_fail <= tr.cases)
        assert np.all(tr.second_decon_fail <= tr.first_decon_fail)
        assert np.all(tr.reinf_case <= tr.cases - tr.first_decon_fail)
        assert np.all(tr.new_case <= reference_config.people)

    def test_alpha(self, reference_config):
        tr = simulate(reference_config, rng=7)
        expected = reference_config.prob_trans * tr.contaminated / reference_config.N0 * 2
        assert np.allclose(tr.alpha, expected)

    def test_full_sanitiser_before_keeps_trays_clean(self, reference_config):
        cfg = dataclasses.replace(reference_config, use_before=1.0)
        tr = simulate(cfg, rng=8)
        assert np.all(tr.first_decon_fail == 0)
        assert np.all(tr.contaminated == 0)
        assert np.all(tr.new_case == 0)

    def test_full_sanitiser_after_stops_cases(self, reference_config):
        cfg = dataclasses.replace(reference_config, use_after=1.0)
        tr = simulate(cfg, rng=9)
        assert np.all(tr.second_decon_fail == 0)
        assert np.all(tr.new_case == 0)
        assert np.all(tr.reinf_case == 0)

    def test_trajectory_read_only(self, reference_config):
        tr = simulate(reference_config, rng=10)
        with pytest.raises(ValueError):
            tr.contaminated[0] = 1
        with pytest.raises(dataclasses.FrozenInstanceError):
            tr.capacity = 3

    def test_as_table(self, reference_config):
        tr = simulate(reference_config, rng=11)
        table = tr.as_table()
        assert set(table) == set(Trajectory.columns())
        assert all(len(col) == len(tr) for col in table.values())


class TestSteadyState:

    def test_closed_form_matches_tray_probability(self, reference_config):
        """Without sanitiser before the trays both closed forms agree."""
        d = DiseaseParameters.from_simulation(reference_config)
        assert steady_state_fraction(reference_config) == pytest.approx(prob_tray_contaminated(d))
        assert steady_state_fraction(reference_config) == pytest.approx(1/31)

    def test_sanitiser_before_lowers_steady_state(self, reference_config):
        cfg = dataclasses.replace(reference_config, use_before=0.5)
        assert steady_state_fraction(cfg) < steady_state_fraction(reference_config)

    def test_no_customers(self):
        cfg = SimulationConfig(people=0, rec_rate=0.0)
        assert steady_state_fraction(cfg) == 0.0

    def test_convergence(self, reference_config):
        """Long run mean approaches the closed-form steady state."""
        cfg = dataclasses.replace(reference_config, max_steps=20000)
        tr = simulate(cfg, rng=2024)
        ss = steady_state_fraction(cfg)
        assert tr.mean_contaminated_fraction(burnin=100) == pytest.approx(ss, rel=0.1)


class TestRunMany:

    def test_summary(self, reference_config):
        cfg = dataclasses.replace(reference_config, max_steps=200)
        trajectories, summary = run_many(cfg, n_runs=3, seed=1)
        assert len(trajectories) == 3
        assert summary['contaminated_fraction'].shape == (201,)
        expected = np.mean([tr.contaminated_fraction for tr in trajectories], axis=0)
        assert np.allclose(summary['contaminated_fraction'], expected)

    def test_runs_differ(self, reference_config):
        trajectories, _ = run_many(reference_config, n_runs=2, seed=1)
        assert not np.array_equal(trajectories[0].cases, trajectories[1].cases)

    def test_reproducible(self, reference_config):
        _, s1 = run_many(reference_config, n_runs=2, seed=5)
        _, s2 = run_many(reference_config, n_runs=2, seed=5)
        assert np.array_equal(s1['new_case'], s2['new_case'])

    def test_zero_runs_raises(self, reference_config):
        with pytest.raises(InvalidConfig):
            run_many(reference_config, n_runs=0)
