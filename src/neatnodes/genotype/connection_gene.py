"""
NEAT Connection Gene Module

This module implements the ConnectionGene class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    ConnectionGene: Gene encoding a weighted connection between nodes
"""

import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from neatnodes.genotype.node_gene import NodeGene
    from neatnodes.run.config         import Config

class ConnectionGene:
    """
    A gene describing a weighted connection between two nodes in a Neural Network.

    Each connection gene represents a directed edge in the neural network graph,
    connecting a source node to a destination node with an associated weight.
    Connection genes are uniquely identified by their innovation number, which
    serves as a historical marker enabling proper gene alignment during crossover.

    The endpoints are stored as node labels, not as node objects: the connection
    finds them in the node mapping of the genome that owns it. The endpoints and
    the innovation number never change after creation; the weight and the
    enabled flag do.

    Public Attributes:
        node_in:    Label of the source node (read-only)
        node_out:   Label of the destination node (read-only)
        innovation: Innovation number identifying this connection (read-only)
        weight:     Weight of the connection
        enabled:    Whether this connection is active in the network

    Public Methods:
        transfer(nodes): Deliver the weighted value of the source to the destination
        mutate(config):  Stochastically mutate the connection weight
    """

    def __init__(self,
                 node_in   : int,
                 node_out  : int,
                 weight    : float,
                 innovation: int,
                 enabled   : bool = True):
        """
        Initialize a connection gene.

        Parameters:
            node_in:    Label of the source node
            node_out:   Label of the destination node
            weight:     Weight of the connection
            innovation: Number identifying this connection across genomes
            enabled:    Whether this connection is active in the network
        """
        self._node_in   : int   = node_in
        self._node_out  : int   = node_out
        self._innovation: int   = innovation
        self.weight     : float = weight
        self.enabled    : bool  = enabled

    @property
    def node_in(self) -> int:
        return self._node_in

    @property
    def node_out(self) -> int:
        return self._node_out

    @property
    def innovation(self) -> int:
        return self._innovation

    def transfer(self, nodes: dict[int, 'NodeGene']) -> None:
        """
        Deliver the source node's value, scaled by the weight, to the destination.

        Parameters:
            nodes: The node mapping (label => NodeGene) of the owning genome
        """
        if not self.enabled:
            return
        nodes[self._node_out].add_input(nodes[self._node_in].value * self.weight)

    def mutate(self, config: 'Config') -> None:
        """
        Stochastically mutate the (gene describing the) connection.

        Mutating the weight is accomplished in one of two ways:
         + modifying the current value additively by a small, uniformly drawn amount
         + replacing the current value by a new one, drawn uniformly from the weight range

        Parameters:
            config: Stores configuration parameters
        """
        if random.random() < config.weight_perturb_prob:
            strength     = config.weight_perturb_strength
            self.weight += random.uniform(-strength, strength)
        else:
            self.weight  = random.uniform(config.min_weight, config.max_weight)

    def __repr__(self):
        return (f"ConnectionGene(node_in={self._node_in:03d}, node_out={self._node_out:03d}, "
                f"weight={self.weight:+.6f}, enabled={self.enabled}, innovation={self._innovation:03d})")

    def __str__(self):
        s  = f"[{self._innovation:03d},{'E' if self.enabled else 'D'},"
        s += f"{self._node_in:02d}=>{self._node_out:02d},{self.weight:+.02f}]"
        return s
