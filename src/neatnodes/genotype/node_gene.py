"""
NEAT Node Gene Module.

This module implements the NodeGene class and NodeType enumeration
for the NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    NodeType: Enumeration for node types (BIAS, INPUT, HIDDEN, OUTPUT)
    NodeGene: Gene encoding a single network node and its current state
"""

from enum import Enum

from neatnodes.activations import sigmoid_activation
from neatnodes.errors      import StateViolation

class NodeType(Enum):
    """
    Nodes come in four types: bias, input, hidden, output.
    """
    BIAS   = "B"
    INPUT  = "I"
    HIDDEN = "H"
    OUTPUT = "O"

    @property
    def is_source(self) -> bool:
        """Whether the node's value is written from outside (bias or input)."""
        return self in (NodeType.BIAS, NodeType.INPUT)

class NodeGene:
    """
    A gene describing a node in a Neural Network, together with its state.

    Besides its identity (label and type), a node holds the signals delivered
    to it during the current propagation step and the value it produced the
    last time it fired. Bias and input nodes never fire: their value is set
    from outside. Output and hidden nodes compute their value by applying a
    steepened sigmoid to the sum of their pending inputs.

    Public Attributes:
        label:  Identifier of this node, unique within its genome
        type:   Type of node (BIAS, INPUT, HIDDEN or OUTPUT)
        inputs: Signals received since the node last fired
        value:  Current output value of the node

    Public Methods:
        add_input(value): Deliver a signal, consumed at the next 'fire()'
        fire():           Sum the pending signals and activate
        set_value(value): Overwrite the value of a bias or input node
        reset():          Set the value back to 0.0
    """

    def __init__(self, label: int, node_type: NodeType):
        """
        Initialize a node gene.

        Parameters:
            label:     Identifier for this node, unique within its genome
            node_type: Type of node (BIAS, INPUT, HIDDEN or OUTPUT)
        """
        self.label : int         = label
        self.type  : NodeType    = node_type
        self.inputs: list[float] = []
        self.value : float       = 0.0

    def add_input(self, value: float) -> None:
        self.inputs.append(value)

    def fire(self) -> None:
        """
        Compute the node's value from the signals it received.

        Does nothing for bias and input nodes, or when no signal arrived since
        the last time the node fired (in which case the node keeps its value).
        """
        if self.type.is_source or not self.inputs:
            return

        self.value  = sigmoid_activation(sum(self.inputs))
        self.inputs = []

    def set_value(self, value: float) -> None:
        """
        Overwrite the node's value.

        Only bias and input nodes can be written to; the value of
        hidden and output nodes is the result of firing them.
        """
        if not self.type.is_source:
            raise StateViolation(f"cannot set the value of {self.type.name.lower()} node {self.label}")
        self.value = value

    def reset(self) -> None:
        self.value = 0.0

    def __repr__(self):
        return f"NodeGene(label={self.label:03d}, type={self.type.name}, value={self.value:+.6f})"

    def __str__(self):
        return f"[{self.label:03d},{self.type.value}]"
