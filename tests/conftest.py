"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture
def innovation_manager():
    """Provide a fresh InnovationManager."""
    from neatnodes.genotype import InnovationManager
    return InnovationManager()


@pytest.fixture
def default_config():
    """Provide a Config holding the default parameters."""
    from neatnodes.run.config import Config
    return Config()


@pytest.fixture
def xor_dataset():
    """The XOR function as a DataSet."""
    from neatnodes.run.dataset import DataSet
    return DataSet([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]],
                   [[0.0], [1.0], [1.0], [0.0]])


@pytest.fixture
def xor_genome_dict():
    """
    A genome evolved to compute XOR: inputs 1 and 2, output 3, hidden node 4.
    """
    return {
        'nodes': [
            {'id': 1, 'type': 'input'},
            {'id': 2, 'type': 'input'},
            {'id': 3, 'type': 'output'},
            {'id': 4, 'type': 'hidden'},
        ],
        'connections': [
            {'from': 3, 'to': 4, 'weight':  1.37168818659685,   'innovation': 1},
            {'from': 4, 'to': 4, 'weight': -1.9866023632803813, 'innovation': 2},
            {'from': 0, 'to': 3, 'weight':  0.5173581564297121, 'innovation': 3},
            {'from': 3, 'to': 3, 'weight': -1.6909665002259813, 'innovation': 4},
            {'from': 1, 'to': 3, 'weight':  0.6210336565818149, 'innovation': 5},
            {'from': 2, 'to': 3, 'weight':  0.973834515119807,  'innovation': 6},
            {'from': 0, 'to': 4, 'weight': -0.6742458822719644, 'innovation': 7},
            {'from': 2, 'to': 4, 'weight':  1.0724675677107962, 'innovation': 8},
            {'from': 4, 'to': 3, 'weight': -1.1832390685857468, 'innovation': 9},
            {'from': 1, 'to': 4, 'weight': -1.0264579235753712, 'innovation': 10},
        ]
    }
