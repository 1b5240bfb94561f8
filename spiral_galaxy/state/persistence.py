"""HDF5-based parameter presets (parameters and camera, no particle data)."""

import h5py
import numpy as np
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional, Tuple

from ..config import SAVE_DIRECTORY
from .parameters import GalaxyParameters

COLOR_FIELDS = ("inside_color", "outside_color")
INTEGER_FIELDS = ("count", "branches")


def generate_save_filename() -> str:
    """Generate a save filename with timestamp in YYYYMMDD-HHMMSS format."""
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return f"galaxy_{timestamp}.h5"


def ensure_save_directory(base_path: Optional[Path] = None) -> Path:
    """Ensure the save directory exists and return its path."""
    if base_path is None:
        save_dir = Path(SAVE_DIRECTORY)
    else:
        save_dir = base_path / SAVE_DIRECTORY

    save_dir.mkdir(parents=True, exist_ok=True)
    return save_dir


def save_preset(
    filepath: Path,
    params: GalaxyParameters,
    camera_state: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Save galaxy parameters to an HDF5 file.

    Args:
        filepath: Path to save the file
        params: Galaxy parameters
        camera_state: Optional camera state dictionary

    Returns:
        Path to the saved file as a string
    """
    with h5py.File(filepath, 'w') as f:
        params_grp = f.create_group('parameters')
        for name, value in params.as_dict().items():
            if name in COLOR_FIELDS:
                # Strings are kept verbatim, RGB(A) tuples as float arrays
                if isinstance(value, str):
                    params_grp.attrs[name] = value
                else:
                    params_grp.attrs[name] = np.asarray(value, dtype=np.float64)
            elif name in INTEGER_FIELDS:
                params_grp.attrs[name] = np.int64(value)
            else:
                params_grp.attrs[name] = np.float64(value)

        # Save camera state if provided
        if camera_state is not None:
            camera_grp = f.create_group('camera')
            camera_grp.create_dataset(
                'center', data=camera_state.get('center', [0, 0, 0]), dtype='float64'
            )
            camera_grp.create_dataset(
                'azimuth', data=camera_state.get('azimuth', 0.0), dtype='float64'
            )
            camera_grp.create_dataset(
                'elevation', data=camera_state.get('elevation', 30.0), dtype='float64'
            )
            camera_grp.create_dataset(
                'distance', data=camera_state.get('distance', 10.0), dtype='float64'
            )

        # Add metadata attributes
        f.attrs['version'] = '1.0'
        f.attrs['created'] = datetime.now().isoformat()

    return str(filepath)


def load_preset(
    filepath: Path,
) -> Tuple[GalaxyParameters, Optional[Dict[str, Any]]]:
    """
    Load galaxy parameters from an HDF5 file.

    Fields missing from the file keep their defaults.

    Args:
        filepath: Path to the HDF5 file

    Returns:
        Tuple of:
            - GalaxyParameters
            - Camera state dictionary (or None if not saved)
    """
    with h5py.File(filepath, 'r') as f:
        values = {}
        attrs = f['parameters'].attrs
        for name in GalaxyParameters.field_names():
            if name not in attrs:
                continue
            value = attrs[name]
            if name in COLOR_FIELDS:
                if isinstance(value, np.ndarray):
                    values[name] = tuple(float(c) for c in value)
                elif isinstance(value, bytes):
                    values[name] = value.decode()
                else:
                    values[name] = str(value)
            elif name in INTEGER_FIELDS:
                values[name] = int(value)
            else:
                values[name] = float(value)

        # Load camera state if present
        camera_state = None
        if 'camera' in f:
            camera_state = {
                'center': f['camera/center'][:].tolist(),
                'azimuth': float(f['camera/azimuth'][()]),
                'elevation': float(f['camera/elevation'][()]),
                'distance': float(f['camera/distance'][()]),
            }

    return GalaxyParameters.from_dict(values), camera_state


def save_galaxy_preset(
    params: GalaxyParameters,
    camera_state: Optional[Dict[str, Any]] = None,
    base_path: Optional[Path] = None,
) -> str:
    """
    Save the current parameters under a timestamped name.

    Args:
        params: Galaxy parameters
        camera_state: Optional camera state dictionary
        base_path: Base path for save directory (uses cwd if None)

    Returns:
        Path to the saved file
    """
    save_dir = ensure_save_directory(base_path)
    filepath = save_dir / generate_save_filename()
    return save_preset(filepath, params.snapshot(), camera_state)
