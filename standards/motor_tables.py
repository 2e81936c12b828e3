from enum import Enum

from core.errors import InvalidInputError

class MotorType(Enum):
    SINGLE_PHASE = "single-phase"
    THREE_PHASE = "three-phase"
    SYNCHRONOUS = "synchronous"
    WOUND_ROTOR = "wound-rotor"
    DC = "dc"

class ProtectionType(Enum):
    NONTIME_DELAY_FUSE = "nontime-delay-fuse"
    TIME_DELAY_FUSE = "time-delay-fuse"
    INSTANT_TRIP_CB = "instant-trip-cb"
    INVERSE_TIME_CB = "inverse-time-cb"

# NEC Table 430.248 - Full-Load Currents in Amperes, Single-Phase AC Motors
# Format: {Voltage: {HP: Amps}}
NEC_430_248 = {
    115: {0.17: 4.4, 0.25: 5.8, 0.33: 7.2, 0.5: 9.8, 0.75: 13.8, 1: 16, 1.5: 20, 2: 24, 3: 34,
          5: 56, 7.5: 80, 10: 100},
    208: {0.17: 2.4, 0.25: 3.2, 0.33: 4.0, 0.5: 5.4, 0.75: 7.6, 1: 8.8, 1.5: 11, 2: 13.2, 3: 18.7,
          5: 30.8, 7.5: 44, 10: 55},
    230: {0.17: 2.2, 0.25: 2.9, 0.33: 3.6, 0.5: 4.9, 0.75: 6.9, 1: 8, 1.5: 10, 2: 12, 3: 17,
          5: 28, 7.5: 40, 10: 50},
}

# NEC Table 430.250 - Full-Load Current, Three-Phase AC Motors (induction type)
NEC_430_250 = {
    208: {0.5: 2.4, 0.75: 3.5, 1: 4.6, 1.5: 6.6, 2: 7.5, 3: 10.6, 5: 16.7, 7.5: 24.2, 10: 30.8,
          15: 46.2, 20: 59.4, 25: 74.8, 30: 88, 40: 114, 50: 143, 60: 169, 75: 211, 100: 273},
    230: {0.5: 2.2, 0.75: 3.2, 1: 4.2, 1.5: 6.0, 2: 6.8, 3: 9.6, 5: 15.2, 7.5: 22, 10: 28,
          15: 42, 20: 54, 25: 68, 30: 80, 40: 104, 50: 130, 60: 154, 75: 192, 100: 248},
    460: {0.5: 1.1, 0.75: 1.6, 1: 2.1, 1.5: 3.0, 2: 3.4, 3: 4.8, 5: 7.6, 7.5: 11, 10: 14,
          15: 21, 20: 27, 25: 34, 30: 40, 40: 52, 50: 65, 60: 77, 75: 96, 100: 124},
    575: {0.5: 0.9, 0.75: 1.3, 1: 1.7, 1.5: 2.4, 2: 2.7, 3: 3.9, 5: 6.1, 7.5: 9, 10: 11,
          15: 17, 20: 22, 25: 27, 30: 32, 40: 41, 50: 52, 60: 62, 75: 77, 100: 99},
}

# NEC Table 430.247 - Full-Load Current in Amperes, Direct-Current Motors
NEC_430_247 = {
    120: {0.25: 3.1, 0.33: 4.1, 0.5: 5.4, 0.75: 7.6, 1: 9.5, 1.5: 13.2, 2: 17, 3: 25, 5: 40,
          7.5: 58, 10: 76},
    240: {0.25: 1.6, 0.33: 2.0, 0.5: 2.7, 0.75: 3.8, 1: 4.7, 1.5: 6.6, 2: 8.5, 3: 12.2, 5: 20,
          7.5: 29, 10: 38, 15: 55, 20: 72, 25: 89, 30: 106, 40: 140, 50: 173},
}

FLC_TABLES = {
    MotorType.SINGLE_PHASE: (NEC_430_248, "NEC 430.248"),
    MotorType.THREE_PHASE: (NEC_430_250, "NEC 430.250"),
    # Synchronous and wound-rotor motors use the polyphase induction column
    MotorType.SYNCHRONOUS: (NEC_430_250, "NEC 430.250"),
    MotorType.WOUND_ROTOR: (NEC_430_250, "NEC 430.250"),
    MotorType.DC: (NEC_430_247, "NEC 430.247"),
}

_POLYPHASE = {
    ProtectionType.NONTIME_DELAY_FUSE: 300,
    ProtectionType.TIME_DELAY_FUSE: 175,
    ProtectionType.INSTANT_TRIP_CB: 800,
    ProtectionType.INVERSE_TIME_CB: 250,
}

# NEC Table 430.52 - Maximum Rating or Setting of Motor Branch-Circuit
# Short-Circuit and Ground-Fault Protective Devices (percent of FLC)
NEC_430_52 = {
    MotorType.SINGLE_PHASE: _POLYPHASE,
    MotorType.THREE_PHASE: _POLYPHASE,
    MotorType.SYNCHRONOUS: _POLYPHASE,
    MotorType.WOUND_ROTOR: {
        ProtectionType.NONTIME_DELAY_FUSE: 150,
        ProtectionType.TIME_DELAY_FUSE: 150,
        ProtectionType.INSTANT_TRIP_CB: 800,
        ProtectionType.INVERSE_TIME_CB: 150,
    },
    MotorType.DC: {
        ProtectionType.NONTIME_DELAY_FUSE: 150,
        ProtectionType.TIME_DELAY_FUSE: 150,
        ProtectionType.INSTANT_TRIP_CB: 250,
        ProtectionType.INVERSE_TIME_CB: 150,
    },
}

def motor_full_load_current(motor_type: MotorType, voltage: int, horsepower: float) -> float:
    table, ref = FLC_TABLES[motor_type]
    by_hp = table.get(voltage)
    if by_hp is None:
        raise InvalidInputError("voltage", f"{ref} has no {voltage}V column for {motor_type.value} motors")
    try:
        return by_hp[horsepower]
    except KeyError:
        raise InvalidInputError("horsepower", f"{ref} lists no {horsepower} HP motor at {voltage}V") from None

def horsepower_options(motor_type: MotorType, voltage: int):
    table, _ = FLC_TABLES[motor_type]
    return sorted(table.get(voltage, {}))

def protection_percent(motor_type: MotorType, protection: ProtectionType) -> int:
    return NEC_430_52[motor_type][protection]
