"""Decision data model: the one action a side takes in a turn."""

from dataclasses import dataclass

from ..utils.constants import BUILDABLE_TYPES, SCAN_TYPES
from .fleet import FleetComposition

DECISION_TYPES = ("build", "attack", "scan", "wait")


@dataclass
class Decision:
    """Tagged action: build, attack, scan or wait.

    Only the fields belonging to the action's tag are set; use the
    classmethod constructors rather than filling fields by hand.
    """

    action: str  # One of DECISION_TYPES
    build_type: str | None = None
    quantity: int | None = None
    target: str | None = None
    fleet: FleetComposition | None = None
    scan_type: str | None = None

    def __post_init__(self):
        """Validate the fields required by the action tag."""
        if self.action not in DECISION_TYPES:
            raise ValueError(f"Invalid action: {self.action}")
        if self.action == "build":
            if self.build_type not in BUILDABLE_TYPES:
                raise ValueError(f"Invalid build type: {self.build_type}")
            if self.quantity is None or self.quantity <= 0:
                raise ValueError(f"Invalid quantity: {self.quantity} (must be > 0)")
        elif self.action == "attack":
            if not self.target:
                raise ValueError("Attack target cannot be empty")
            if self.fleet is None or self.fleet.is_empty():
                raise ValueError("Cannot attack with an empty fleet")
        elif self.action == "scan":
            if self.scan_type not in SCAN_TYPES:
                raise ValueError(f"Invalid scan type: {self.scan_type}")

    @classmethod
    def build(cls, build_type: str, quantity: int = 1) -> "Decision":
        return cls(action="build", build_type=build_type, quantity=quantity)

    @classmethod
    def attack(cls, target: str, fleet: FleetComposition) -> "Decision":
        return cls(action="attack", target=target, fleet=fleet)

    @classmethod
    def scan(cls, scan_type: str) -> "Decision":
        return cls(action="scan", scan_type=scan_type)

    @classmethod
    def wait(cls) -> "Decision":
        return cls(action="wait")

    def describe(self) -> str:
        """Short description for logs."""
        if self.action == "build":
            return f"build {self.quantity} {self.build_type}"
        if self.action == "attack":
            return f"attack {self.target} with {self.fleet.to_dict()}"
        if self.action == "scan":
            return f"{self.scan_type} scan"
        return "wait"
