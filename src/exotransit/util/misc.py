import astropy.units as u
import numpy as np

from exotransit.errors import ConfigurationError


def finite_float(value, name="value"):
    """
    Coerce a value to a finite float, raising ConfigurationError otherwise
    """
    try:
        converted = float(value)
    except (TypeError, ValueError) as err:
        raise ConfigurationError(f"{name} is not a number: {value!r}") from err
    if not np.isfinite(converted):
        raise ConfigurationError(f"{name} must be finite, got {converted}")
    return converted


def to_scene_value(value, unit, name="value"):
    """
    Convert a record value to a plain float in scene units
    Args:
        value (float or astropy Quantity):
            Raw value from an ingestion record. Plain numbers are assumed to
            already be in scene units
        unit (astropy Unit):
            Scene unit for this quantity (R_sun for lengths, days for time,
            radians for angles)
        name (str):
            Field name used in error messages
    Returns:
        float
    """
    if value is None:
        raise ConfigurationError(f"{name} is missing")
    if isinstance(value, u.Quantity):
        try:
            value = value.to_value(unit)
        except u.UnitConversionError as err:
            raise ConfigurationError(f"{name} has incompatible units: {err}") from err
    return finite_float(value, name)


def orbital_phase(times, period):
    """
    Fraction of the orbit completed at the given times, always in [0, 1)
    Args:
        times (float or numpy array):
            Simulation times
        period (float):
            Orbital period
    Returns:
        phase (float or numpy array)
    """
    phase = np.mod(np.asarray(times, dtype=float) / period, 1.0)
    # np.mod can round up to exactly 1.0 for tiny negative inputs
    phase = np.where(phase >= 1.0, 0.0, phase)
    if phase.ndim == 0:
        return float(phase)
    return phase


def circle_overlap_area(d, r1, r2):
    """
    Area shared by two circles whose centres are a distance d apart
    Args:
        d (float or numpy array):
            Centre separation
        r1 (float or numpy array):
            Radius of the first circle
        r2 (float or numpy array):
            Radius of the second circle
    Returns:
        area (float or numpy array)
    """
    d, r1, r2 = np.broadcast_arrays(
        np.abs(np.asarray(d, dtype=float)),
        np.asarray(r1, dtype=float),
        np.asarray(r2, dtype=float),
    )
    area = np.zeros(d.shape)

    contained = d <= np.abs(r1 - r2)
    area[contained] = np.pi * np.minimum(r1, r2)[contained] ** 2

    partial = ~contained & (d < r1 + r2)
    dp, a, b = d[partial], r1[partial], r2[partial]
    alpha = np.arccos(np.clip((dp**2 + a**2 - b**2) / (2 * dp * a), -1.0, 1.0))
    beta = np.arccos(np.clip((dp**2 + b**2 - a**2) / (2 * dp * b), -1.0, 1.0))
    kite = np.clip(
        (-dp + a + b) * (dp + a - b) * (dp - a + b) * (dp + a + b), 0.0, None
    )
    area[partial] = a**2 * alpha + b**2 * beta - 0.5 * np.sqrt(kite)

    if area.ndim == 0:
        return float(area)
    return area


def limb_darkening_weight(r_frac, u_coeff):
    """
    Linear limb-darkening intensity at a fractional stellar radius, normalized
    so the disk-averaged intensity is one
    Args:
        r_frac (float or numpy array):
            Distance from the stellar centre divided by the stellar radius,
            values past the limb are clipped to it
        u_coeff (float):
            Linear limb-darkening coefficient
    Returns:
        weight (float or numpy array)
    """
    r_frac = np.clip(np.asarray(r_frac, dtype=float), 0.0, 1.0)
    mu = np.sqrt(1.0 - r_frac**2)
    weight = (1.0 - u_coeff * (1.0 - mu)) / (1.0 - u_coeff / 3.0)
    if weight.ndim == 0:
        return float(weight)
    return weight
