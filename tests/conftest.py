import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import pytest

from Trays.Parameters import SimulationConfig, DiseaseParameters


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


@pytest.fixture
def reference_config() -> SimulationConfig:
    """Reference lane: 40 trays, 2000 customers/day, 1% prevalence."""
    return SimulationConfig(dt=0.1, max_steps=1000, N0=40, T0=0,
                            prob_trans=1/15, people=2000,
                            use_before=0.0, use_after=0.0,
                            prev=0.01, rec_rate=1.0)


@pytest.fixture
def disease(reference_config) -> DiseaseParameters:
    return DiseaseParameters.from_simulation(reference_config)
