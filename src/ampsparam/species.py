from dataclasses import dataclass


@dataclass(frozen=True)
class SpeciesInfo:
    """Canonical particle species with its charge (e) and mass (amu)."""

    tag: str
    charge: int
    mass_amu: float


PROTON = SpeciesInfo("proton", 1, 1.0073)
HELIUM = SpeciesInfo("helium", 2, 4.0026)
ELECTRON = SpeciesInfo("electron", -1, 0.000549)

CUSTOM_TAG = "custom"

# Lowercase alias -> species
SPECIES_ALIASES: dict[str, SpeciesInfo] = {
    "proton": PROTON,
    "h+": PROTON,
    "h": PROTON,
    "helium": HELIUM,
    "he2+": HELIUM,
    "he": HELIUM,
    "electron": ELECTRON,
    "e-": ELECTRON,
    "e": ELECTRON,
}


def resolve_species(name: str) -> SpeciesInfo | None:
    """Look up a species by any of its aliases, ignoring case and surrounding whitespace.

    Returns None for names that are not in the alias table.
    """
    return SPECIES_ALIASES.get(name.strip().lower())
