"""CAP instruction text, keyed by hazard then severity.

Every hazard defines every severity, including ``unknown``.
"""

from types import MappingProxyType

from engine.types import AlertSeverity as S, HazardType as H

_MONITOR = "Monitor situation."

INSTRUCTIONS = MappingProxyType({
    H.OIL_SPILL: {
        S.EXTREME: "Immediate evacuation of fishing vessels from affected zone. "
                   "Contact Coast Guard.",
        S.SEVERE: "Avoid affected waters. Report sightings to authorities.",
        S.MODERATE: "Exercise caution in nearby waters. Monitor updates.",
        S.MINOR: "Be aware of potential impacts.",
        S.UNKNOWN: _MONITOR,
    },
    H.HAB: {
        S.EXTREME: "Do not consume seafood from affected region. "
                   "Health advisory in effect.",
        S.SEVERE: "Avoid swimming in affected coastal waters.",
        S.MODERATE: "Shellfish harvesting suspended in affected area.",
        S.MINOR: "Monitor water quality reports.",
        S.UNKNOWN: _MONITOR,
    },
    H.CYCLONE: {
        S.EXTREME: "EVACUATE coastal areas immediately. Seek sturdy shelter inland.",
        S.SEVERE: "Complete preparations. Move to safe shelter before landfall.",
        S.MODERATE: "Secure property. Prepare emergency supplies.",
        S.MINOR: "Stay informed and monitor updates.",
        S.UNKNOWN: _MONITOR,
    },
    H.MHW: {
        S.EXTREME: "Expect severe coral bleaching. Avoid strenuous diving activities.",
        S.SEVERE: "Marine ecosystem stress likely. Monitor fish behavior.",
        S.MODERATE: "Elevated water temperatures detected.",
        S.MINOR: "Warmer than normal conditions.",
        S.UNKNOWN: _MONITOR,
    },
    H.RIP_CURRENT: {
        S.EXTREME: "DO NOT enter the water. Swimming prohibited.",
        S.SEVERE: "Experienced swimmers only. Swim near lifeguards.",
        S.MODERATE: "Use caution. Know how to escape rip currents.",
        S.MINOR: "Be aware of changing conditions.",
        S.UNKNOWN: _MONITOR,
    },
})


def instruction_for(hazard_type: H, severity: S) -> str:
    return INSTRUCTIONS[hazard_type].get(severity, INSTRUCTIONS[hazard_type][S.UNKNOWN])
