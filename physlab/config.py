"""Configuration for input bounds, persistence, and fit selection."""

from __future__ import annotations

from dataclasses import dataclass, field

ACTIVATION_METHODS: tuple[str, ...] = ("two_point", "least_squares")


@dataclass(frozen=True)
class ValidationBounds:
    """Authoritative bound table applied to raw measurement input.

    Attributes:
        temperature_min: Lowest accepted heater temperature in °C (inclusive).
        temperature_max: Highest accepted heater temperature in °C (inclusive).
        resistance_max: Highest accepted resistance in Ω (inclusive). The lower
            bound is always exclusive zero; a resistance cannot be <= 0.
        deltaI_min: Lowest accepted intensity ratio ΔI/I₀ (inclusive).
        deltaI_max: Highest accepted intensity ratio ΔI/I₀ (inclusive).
        position_min: Lowest accepted probe position X₁/X₂ in mm (inclusive).
    """

    temperature_min: float = 0.0
    temperature_max: float = 200.0
    resistance_max: float = 1e6
    deltaI_min: float = 0.0
    deltaI_max: float = 1.0
    position_min: float = 0.0

    def __post_init__(self) -> None:
        for low, high in (
            ("temperature_min", "temperature_max"),
            ("deltaI_min", "deltaI_max"),
        ):
            if getattr(self, low) > getattr(self, high):
                raise ValueError(
                    f"{low} ({getattr(self, low):g}) must not exceed "
                    f"{high} ({getattr(self, high):g})"
                )
        if self.resistance_max <= 0:
            raise ValueError("resistance_max must be greater than 0")


@dataclass(frozen=True)
class LabConfig:
    """Per-store settings.

    Attributes:
        bounds: Bound table for raw input.
        storage_key: Key the resistance table is persisted under.
        activation_method: ``"two_point"`` (endpoints) or ``"least_squares"``.
    """

    bounds: ValidationBounds = field(default_factory=ValidationBounds)
    storage_key: str = "physics_lab_measurements"
    activation_method: str = "two_point"

    def __post_init__(self) -> None:
        if self.activation_method not in ACTIVATION_METHODS:
            raise ValueError(
                f"activation_method must be one of {ACTIVATION_METHODS}, "
                f"got '{self.activation_method}'"
            )


DEFAULT_BOUNDS = ValidationBounds()
DEFAULT_CONFIG = LabConfig()
