"""
NEAT Activations Package

Modules:
    basic_activations: the steepened sigmoid applied by every firing node
"""

from neatnodes.activations.basic_activations import SIGMOID_STEEPNESS, sigmoid_activation

__all__ = ['SIGMOID_STEEPNESS', 'sigmoid_activation']
