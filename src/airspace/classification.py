"""Airspace classification tables.

Decides whether an airspace feature needs ATC clearance to enter and
whether it is an advisory danger area. Lookups are case-sensitive and
unknown classes or types are treated as False.

Typical usage:
    from airspace.classification import clearance_required, danger

    if clearance_required(feature):
        print(f"{feature.name}: contact ATC before entering")
"""

from airspace.model import Feature

# ICAO airspace classes.
CONTROLLED_AIRSPACE_CLASSES = {
    "A": True,  # Most airways; London/Manchester TMAs
    "B": True,  # Not used in UK
    "C": True,  # Mostly above FL195 and some airways
    "D": True,  # Most aerodrome CTRs and CTAs
    "E": True,  # Scottish airways; VFR may enter but contact is expected
    "F": False,  # Not used in UK
    "G": False,  # Open FIR
}

# Not all are strictly prohibited, some are "avoid unless ...".
PROHIBITED_TYPES = {
    "ATZ": True,  # Aerodrome Traffic Zone
    "AWY": True,  # Airway
    "CTA": True,  # Control Area
    "CTR": True,  # Control Zone
    "MATZ": True,  # Military ATZ
    "P": True,  # Prohibited area
    "R": True,  # Restricted area
    "RAT": True,  # Temporary restricted area
    "RMZ": True,  # Radio mandatory zone
    "TMA": True,  # Terminal control area
    "TRA": True,  # Temporary reserved area
    "TMZ": True,  # Transponder mandatory zone
}

DANGER_TYPES = {
    "AIAA": True,  # Area of intense aerial activity
    "D": True,  # Danger area
    "D_OTHER": True,  # Dangerous activity, but not a danger area
    "DZ": True,  # Drop zone
    "GLIDER": True,  # Gliding operations
    "GVS": False,  # Gas venting station
    "HIRTA": True,  # High intensity radio transmission area
    "ILS": False,  # ILS feather
    "LASER": True,  # Laser site
    "NOATZ": True,  # Non-ATZ airfield
    "UL": True,  # Ultra-light strip
}


def clearance_required(feature: Feature) -> bool:
    """Check whether entering the feature requires ATC clearance.

    Args:
        feature: Feature to classify (uses its class and type)

    Returns:
        True for controlled classes A-E or prohibited/controlled types

    Examples:
        >>> clearance_required(Feature(id="x", name="X", type="CTR", cls="D"))
        True
    """
    return CONTROLLED_AIRSPACE_CLASSES.get(feature.cls, False) or PROHIBITED_TYPES.get(
        feature.type, False
    )


def danger(feature: Feature) -> bool:
    """Check whether the feature is an advisory danger area."""
    return DANGER_TYPES.get(feature.type, False)
