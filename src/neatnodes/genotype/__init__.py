"""
NEAT Genotype Package

This package implements the genotype representation for the NEAT (NeuroEvolution of
Augmenting Topologies) algorithm. It provides classes for encoding neural network
structures and parameters at the genetic level, and for executing them.

The NEAT genotype consists of two types of genes:
- Node genes:       Encode individual neurons (bias, input, hidden, output) and their state
- Connection genes: Encode weighted connections between neurons with innovation numbers

Modules:
    node_gene:          NodeType enumeration and NodeGene class
    connection_gene:    ConnectionGene class
    genome:             Genome class
    innovation_manager: InnovationManager class

Exported Classes:
    NodeType:          Enumeration for node types (BIAS, INPUT, HIDDEN, OUTPUT)
    NodeGene:          Gene encoding a single network node
    ConnectionGene:    Gene encoding a weighted connection between nodes
    Genome:            Complete genome representing a neural network
    InnovationManager: Per-generation ledger of innovation numbers
"""

from neatnodes.genotype.connection_gene    import ConnectionGene
from neatnodes.genotype.genome             import Genome
from neatnodes.genotype.innovation_manager import InnovationManager
from neatnodes.genotype.node_gene          import NodeType, NodeGene

__all__ = ['ConnectionGene',
           'Genome',
           'InnovationManager',
           'NodeGene',
           'NodeType']
