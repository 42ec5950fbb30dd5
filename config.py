from Trays.Parameters import SimulationConfig, DiseaseParameters
from Trays.Sweep import GRID_AXIS, PREVALENCES
from Trays.Behaviour import Uptake

# ------------------------- overall parameters -------------------------------------

# plot graphics at the end
plotting = True
# output single run statistics
output_singleruns = True
# output summary statistics
output_summary = True

# times to run simulation
Nsim = 10
# seed of the first run, None for a fresh one
seed = 1

# -- screening lane --
# trays in the lane
N0 = 40
# customers per day
people = 2000
# trays filled per customer (dont change)
trays_per_customer = 2

# -- time --
# step [days]
dt = 0.1
maxSteps = 10000

# -- disease --
# P that a contaminated tray passes the pathogen on, per contact
probTrans = 1/15
# P that a customer arrives infectious
prev = 0.01
# decontamination rate per tray and day
recRate = 1

# -- hand sanitiser --
# P(use before touching the trays)
useBefore = 0.0
# P(use after touching the trays)
useAfter = 0.0

simulation = SimulationConfig(dt=dt, max_steps=maxSteps, N0=N0, T0=0,
                              prob_trans=probTrans, people=people,
                              use_before=useBefore, use_after=useAfter,
                              prev=prev, rec_rate=recRate,
                              trays_per_customer=trays_per_customer)

disease = DiseaseParameters.from_simulation(simulation)

# ------------------------- sweeps ---------------------------------------------------

# random samples per sweep
n_samples = 1000
# smallest threat sampled, 1/threat is needed for k
threat_floor = 0.001
# threat x efficacy axis
grid_axis = GRID_AXIS
# prevalences of the sensitivity analysis
prevalences = PREVALENCES

uptake = Uptake.THREAT_INCREASING
