"""
Closed vocabularies shared by the database models and the API schemas.

Member values are the strings the web front end sends and displays.
"""

import enum


class FuelType(str, enum.Enum):
    GASOLINE = "Gasolina"
    ETHANOL = "Etanol"
    DIESEL = "Diesel"
    CNG = "GNV"


class MaintenanceType(str, enum.Enum):
    PREVENTIVE = "Preventiva"
    CORRECTIVE = "Corretiva"
    IMPROVEMENT = "Melhoria"
    PERIODIC_REVIEW = "Revisão Periódica"


class MaintenanceCategory(str, enum.Enum):
    ENGINE = "Motor"
    BRAKES = "Freios"
    SUSPENSION = "Suspensão"
    TIRES = "Pneus"
    ELECTRICAL = "Elétrica"
    BODYWORK = "Funilaria"
    OIL_FILTERS = "Óleo e Filtros"
    OTHER = "Outros"


def enum_values(enum_cls):
    """Persist members by value, not by name."""
    return [member.value for member in enum_cls]
