"""
Input validation utilities.

Converts caller data into the (n, d) tensor layout the engine works on and
resolves random sources into torch generators.
"""

from typing import Optional, Union
import numbers
import torch
from torch import Tensor
import numpy as np

from ..base.exceptions import ConfigurationError, ConfigurationErrorKind


def validate_points(X: Union[Tensor, np.ndarray, list, tuple],
                    dtype: torch.dtype = torch.float32,
                    device: Optional[torch.device] = None,
                    ensure_finite: bool = True) -> Tensor:
    """Validate and convert input points to a 2D tensor.
    
    Every point of one call must have the same dimension; this is checked
    once here so the rest of the engine can rely on it.
    
    Args:
        X: Input points (tensor, numpy array, or sequence of sequences)
        dtype: Target data type
        device: Target device
        ensure_finite: Whether to check for inf/nan
        
    Returns:
        (n, d) tensor
        
    Raises:
        TypeError: If X cannot be converted
        ValueError: If validation fails
    """
    # Convert to tensor
    if isinstance(X, Tensor):
        X = X.detach().to(dtype=dtype, device=device)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.ascontiguousarray(X)).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        try:
            X = torch.tensor(X, dtype=dtype, device=device)
        except (ValueError, TypeError) as err:
            raise ValueError("All points must be numeric sequences of the same "
                             "dimension") from err
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")
        
    if X.dim() != 2:
        raise ValueError(f"Expected 2D array of points, got {X.dim()}D")
        
    n_samples, n_features = X.shape
    if n_samples > 0 and n_features < 1:
        raise ValueError("Points must have at least one coordinate")
        
    # Check for finite values
    if ensure_finite:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")
            
    return X


def check_random_state(random_state: Union[None, int, torch.Generator]) -> torch.Generator:
    """Turn a seed or generator into a CPU torch.Generator.
    
    Args:
        random_state: None (fresh non-deterministic seed), an integer seed,
                      or an existing CPU generator (returned as is)
                      
    Returns:
        torch.Generator
        
    Raises:
        ConfigurationError: If random_state is of an unsupported kind
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
        
    if isinstance(random_state, torch.Generator):
        if random_state.device.type != 'cpu':
            raise ConfigurationError(
                ConfigurationErrorKind.INVALID_RANDOM_STATE,
                f"Random source must be a CPU generator, got {random_state.device}"
            )
        return random_state
        
    if isinstance(random_state, numbers.Integral) and not isinstance(random_state, bool):
        generator = torch.Generator()
        try:
            generator.manual_seed(int(random_state))
        except RuntimeError as err:
            raise ConfigurationError(
                ConfigurationErrorKind.INVALID_RANDOM_STATE,
                f"Seed out of range: {random_state}"
            ) from err
        return generator
        
    raise ConfigurationError(
        ConfigurationErrorKind.INVALID_RANDOM_STATE,
        f"random_state must be None, an int, or a torch.Generator, "
        f"got {type(random_state).__name__}"
    )
