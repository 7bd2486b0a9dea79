"""Model layer: patient, resource pools, waiting queue, event loop."""

from edsim.model.patient import Patient
from edsim.model.resources import Resource, ResourcePool
from edsim.model.queue import WaitingQueue
from edsim.model.engine import AssignmentEngine
from edsim.model.processes import EmergencyDepartment, run_simulation

__all__ = [
    "Patient",
    "Resource",
    "ResourcePool",
    "WaitingQueue",
    "AssignmentEngine",
    "EmergencyDepartment",
    "run_simulation",
]
