from clinic_inventory.domain.medications.models import Medication
from clinic_inventory.domain.patients.models import Patient, Gender
from clinic_inventory.domain.usages.models import Usage

__all__ = [
    "Medication",
    "Patient",
    "Gender",
    "Usage",
]
