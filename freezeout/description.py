"""Human-readable model report and the parameter fingerprint used to tag runs."""

import zlib
from typing import List

from .config import ModelConfig, RunSettings
from .kinematics import HBAR_C
from .thermodynamics import Chemistry

RULE = "#" * 50


def parameter_hash(config: ModelConfig, model_name: str = "SR") -> str:
    """CRC32 of the resolved parameters, as 8 hex digits."""
    thermo = config.thermo
    values: List[object] = [
        model_name,
        config.freeze_out_time0,
        config.radius,
        config.expansion_rate,
        config.hypersurface_slope,
        config.gamma_s,
        thermo.temperature,
    ]
    if thermo.chemistry is Chemistry.CHEMICAL_POTENTIAL:
        values += [thermo.mu_b, thermo.mu_i, thermo.mu_s, thermo.mu_c]
    else:
        values += [thermo.lambda_q, thermo.lambda_i, thermo.lambda_s, thermo.lambda_c]
        values += [thermo.gamma_q, thermo.gamma_s, thermo.gamma_c]
    text = "".join(repr(v) for v in values)
    return f"{zlib.crc32(text.encode('utf-8')) & 0xFFFFFFFF:08x}"


def _line(label: str, value, unit: str = "") -> str:
    return f"# - {label:<25}: {value!s:>12} {unit}".rstrip()


def describe(config: ModelConfig, settings: RunSettings) -> str:
    thermo = config.thermo
    lines = [
        RULE,
        f"# Model: {settings.model_name} (single freeze-out, spherical)",
        _line("freeze-out Cart. time", f"{config.freeze_out_time0 * HBAR_C:.4f}", "[fm]"),
        _line("radial size", f"{config.radius * HBAR_C:.4f}", "[fm]"),
        _line("Hubble velocity", f"{config.expansion_rate:.4f}", "[c]"),
        _line("hypersurface slope (A)", f"{config.hypersurface_slope:.4f}", "[1]"),
        _line("gamma_S", f"{config.gamma_s:.4f}", "[1]"),
        _line("freeze-out temperature", f"{thermo.temperature * 1000.0:.2f}", "[MeV]"),
    ]
    if thermo.chemistry is Chemistry.CHEMICAL_POTENTIAL:
        lines += [
            _line("chem. potential Mu_B", f"{thermo.mu_b * 1000.0:.2f}", "[MeV]"),
            _line("chem. potential Mu_I3", f"{thermo.mu_i * 1000.0:.2f}", "[MeV]"),
            _line("chem. potential Mu_S", f"{thermo.mu_s * 1000.0:.2f}", "[MeV]"),
            _line("chem. potential Mu_C", f"{thermo.mu_c * 1000.0:.2f}", "[MeV]"),
        ]
    else:
        lines += [
            _line("fugacity Lambda_I3", f"{thermo.lambda_i:.4f}", "[1]"),
            _line("fugacity Lambda_Q", f"{thermo.lambda_q:.4f}", "[1]"),
            _line("fugacity Lambda_S", f"{thermo.lambda_s:.4f}", "[1]"),
            _line("fugacity Lambda_C", f"{thermo.lambda_c:.4f}", "[1]"),
            _line("fugacity Gamma_Q", f"{thermo.gamma_q:.4f}", "[1]"),
            _line("fugacity Gamma_S", f"{thermo.gamma_s:.4f}", "[1]"),
            _line("fugacity Gamma_C", f"{thermo.gamma_c:.4f}", "[1]"),
        ]
    lines += [
        f"# Parameters hash (CRC32)  : {parameter_hash(config, settings.model_name)}",
        f"# Integration samples      : {settings.integrate_samples}",
        f"# Random seed              : {'yes' if settings.randomize else 'no'}",
        f"# Generation date          : {settings.timestamp} #",
        RULE,
    ]
    return "\n".join(lines) + "\n"
