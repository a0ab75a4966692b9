from dataclasses import dataclass, field


@dataclass
class Sample:
    interface: str = ""
    r_bytes: int = 0
    t_bytes: int = 0


@dataclass
class InterfaceState:
    interface: str = ""
    previous_r_bytes: int = 0
    previous_t_bytes: int = 0
    current_r_bytes: int = 0
    current_t_bytes: int = 0


@dataclass
class ScaledRate:
    raw: float = 0.0
    magnitude: float = 0.0
    prefix: str = ""


@dataclass
class RateRecord:
    interface: str = ""
    received_bits: ScaledRate = field(default_factory=ScaledRate)
    received_bytes: ScaledRate = field(default_factory=ScaledRate)
    transmitted_bits: ScaledRate = field(default_factory=ScaledRate)
    transmitted_bytes: ScaledRate = field(default_factory=ScaledRate)
