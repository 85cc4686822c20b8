"""State I/O for saving and loading simulation states."""

import numpy as np
import json
from typing import Tuple, Dict, Any, Optional
from pathlib import Path

from tidal_sim.physics.nbody import NBodySystem


def save_state(
    system: NBodySystem,
    output_path: str,
    metadata: Optional[Dict[str, Any]] = None
):
    """Save particle state, radii and structure parameters to file.
    
    Args:
        system: System to save
        output_path: Output file path (.npz or .json)
        metadata: Optional metadata dictionary (e.g. time, step count)
    """
    output_path = Path(output_path)
    params = system.params.as_dicts()
    
    if output_path.suffix == '.npz':
        # NumPy compressed format; parameters go in as a JSON string
        save_dict = {
            'positions': system.positions,
            'velocities': system.velocities,
            'masses': system.masses,
            'radii': system.radii,
            'params': json.dumps(params),
            'n_var': system.n_var,
            'G': system.G,
        }
        if metadata:
            for key, value in metadata.items():
                if isinstance(value, (int, float, str)):
                    save_dict[f'metadata_{key}'] = value
        np.savez_compressed(output_path, **save_dict)
    
    elif output_path.suffix == '.json':
        # JSON format (less efficient but human-readable)
        state_dict = {
            'positions': system.positions.tolist(),
            'velocities': system.velocities.tolist(),
            'masses': system.masses.tolist(),
            'radii': system.radii.tolist(),
            'params': params,
            'n_var': system.n_var,
            'G': system.G,
            'metadata': metadata or {}
        }
        with open(output_path, 'w') as f:
            json.dump(state_dict, f, indent=2)
    
    else:
        raise ValueError(f"Unsupported file format: {output_path.suffix}. Use .npz or .json")


def load_state(input_path: str, backend=None) -> Tuple[NBodySystem, Dict[str, Any]]:
    """Load a system saved by ``save_state``.
    
    Args:
        input_path: Input file path
        backend: Optional compute backend for the new system
        
    Returns:
        Tuple of (system, metadata)
    """
    input_path = Path(input_path)
    
    if input_path.suffix == '.npz':
        data = np.load(input_path)
        metadata = {}
        for key in data.keys():
            if key.startswith('metadata_'):
                metadata[key[9:]] = data[key].item()
        state = {
            'positions': data['positions'],
            'velocities': data['velocities'],
            'masses': data['masses'],
            'radii': data['radii'],
            'params': json.loads(str(data['params'])),
            'n_var': int(data['n_var']),
            'G': float(data['G']),
        }
    
    elif input_path.suffix == '.json':
        with open(input_path, 'r') as f:
            state = json.load(f)
        metadata = state.get('metadata', {})
    
    else:
        raise ValueError(f"Unsupported file format: {input_path.suffix}. Use .npz or .json")
    
    system = NBodySystem(backend, G=state['G'])
    system.initialize(
        np.array(state['positions']),
        np.array(state['velocities']),
        np.array(state['masses']),
        radii=np.array(state['radii']),
        params=state['params'],
        n_var=state['n_var'],
    )
    return system, metadata
