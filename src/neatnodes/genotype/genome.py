"""
NEAT Genome Module

This module implements the Genome class for the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    Genome: Complete genome representing a neural network structure
"""

import random
from typing import TYPE_CHECKING

from neatnodes.errors                      import StateViolation, StructuralViolation, InputContractViolation
from neatnodes.genotype.connection_gene    import ConnectionGene
from neatnodes.genotype.innovation_manager import InnovationManager
from neatnodes.genotype.node_gene          import NodeType, NodeGene
if TYPE_CHECKING:
    from neatnodes.run.config import Config

class Genome:
    """
    A NEAT genome representing a neural network as a collection of node and connection genes.

    In the NEAT (NeuroEvolution of Augmenting Topologies) algorithm, a genome encodes
    the structure and parameters of a neural network at the genotype level. It consists of:
    - Node genes: describe network nodes (bias, input, output, hidden)
    - Connection genes: describe weighted connections between nodes, each with an
      innovation number for tracking historical markings during crossover

    Every genome is created holding only the bias node (label 0, value always 1.0);
    input, output and hidden nodes and the connections between them are added with
    'add_node()' / 'add_connection()' or grown through mutation. Connections may form
    cycles, including self-loops: the network is executed one synchronous step at a
    time with 'run()' instead of being evaluated as a DAG.

    The genome doubles as the network that it describes: node genes hold the current
    value of each node. Once its fitness is set, the genome is locked and its structure
    can no longer change; it can still be run.

    Node numbering convention (followed by 'setup_initial_species()' and 'run_function()'):
        - Bias node:    0
        - Input nodes:  [1, num_inputs]
        - Output nodes: [num_inputs + 1, num_inputs + num_outputs]
        - Hidden nodes: labelled with the node count at the time they are added

    Attributes:
        node_genes: Dictionary mapping node labels to NodeGene objects
        conn_genes: Dictionary mapping innovation numbers to ConnectionGene objects

    Public Properties:
        num_inputs:          Number of input nodes
        num_outputs:         Number of output nodes
        fitness:             Fitness of the genome (setting it locks the genome)
        is_fitness_measured: Whether the fitness has been set
        innovation_manager:  The InnovationManager shared by the genomes of this run

    Public Methods:
        add_node(label, node_type):                                Add a node gene
        add_connection(node_in, node_out, weight, enabled, innov): Add a connection gene
        mutate(config):                                            Apply all mutation operations stochastically
        clone_genome():                                            Create an independent, unlocked copy
        write_inputs(inputs):                                      Set the values of the input nodes
        read_outputs():                                            Get the values of the output nodes
        run():                                                     Execute one propagation step
        reset():                                                   Zero the values of all nodes but the bias
        to_dict():                                                 Convert genome to dictionary representation

    Class Methods:
        from_dict(genome_dict, innovation_manager): Create a genome from a dictionary description
    """

    def __init__(self, innovation_manager: InnovationManager):
        """
        Initialize an empty Genome, holding only the bias node.

        Parameters:
            innovation_manager: Hands out innovation numbers for connections created by mutation
        """
        self._innovation_manager: InnovationManager = innovation_manager

        self.node_genes: dict[int, NodeGene]       = {}  # node label => node gene
        self.conn_genes: dict[int, ConnectionGene] = {}  # innovation number => connection gene

        self._num_inputs : int          = 0
        self._num_outputs: int          = 0
        self._fitness    : float | None = None

        bias = NodeGene(0, NodeType.BIAS)
        bias.set_value(1.0)
        self.node_genes[0] = bias

    @classmethod
    def from_dict(cls, genome_dict: dict, innovation_manager: InnovationManager) -> 'Genome':
        """
        Create a Genome from a dictionary description.

        Dictionary format:
            {
                "nodes": [
                    {"id": 1, "type": "input"},
                    {"id": 2, "type": "output"},
                    {"id": 3, "type": "hidden"}
                ],
                "connections": [
                    {"from": 0, "to": 2, "weight":  0.5, "enabled": true, "innovation": 1},
                    {"from": 1, "to": 3, "weight": -0.3},
                    {"from": 3, "to": 2, "weight":  1.5}
                ],
                "fitness": 12.5
            }

        The bias node is implicit; a "bias" entry with id 0 is accepted and skipped.
        Connections default to enabled; connections without an "innovation" field
        receive one from 'innovation_manager'. The optional "fitness" is set last,
        which locks the genome.

        Parameters:
            genome_dict:        Description of the genome
            innovation_manager: The InnovationManager shared by the genomes of this run

        Returns:
            The new genome
        """
        genome = cls(innovation_manager)

        for node in genome_dict.get("nodes", []):
            try:
                node_type = NodeType[node["type"].upper()]
            except KeyError:
                raise StructuralViolation(f"invalid node type '{node['type']}' for node {node['id']}")
            if node_type == NodeType.BIAS and node["id"] == 0:
                continue
            genome.add_node(node["id"], node_type)

        for conn in genome_dict.get("connections", []):
            innovation = conn.get("innovation")
            if innovation is None:
                innovation = innovation_manager.get_innovation_number(conn["from"], conn["to"])
            genome.add_connection(conn["from"],
                                  conn["to"],
                                  conn["weight"],
                                  conn.get("enabled", True),
                                  innovation)

        if genome_dict.get("fitness") is not None:
            genome.fitness = genome_dict["fitness"]

        return genome

    def to_dict(self) -> dict:
        """
        Convert the genome to a dictionary representation.

        This is the inverse operation of from_dict(). Nodes are listed by label and
        connections by innovation number; the bias node is left out.
        """
        genome_dict = {
            "nodes": [{"id": label, "type": node.type.name.lower()}
                      for label, node in sorted(self.node_genes.items())
                      if node.type != NodeType.BIAS],
            "connections": [{"from"      : conn.node_in,
                             "to"        : conn.node_out,
                             "weight"    : conn.weight,
                             "enabled"   : conn.enabled,
                             "innovation": conn.innovation}
                            for _, conn in sorted(self.conn_genes.items())]
        }
        if self._fitness is not None:
            genome_dict["fitness"] = self._fitness
        return genome_dict

    @property
    def innovation_manager(self) -> InnovationManager:
        return self._innovation_manager

    @property
    def num_inputs(self) -> int:
        return self._num_inputs

    @property
    def num_outputs(self) -> int:
        return self._num_outputs

    @property
    def is_fitness_measured(self) -> bool:
        return self._fitness is not None

    @property
    def fitness(self) -> float:
        """
        The fitness of the genome.

        Reading it before it was set raises StateViolation. It can only be set
        once; from then on the structure of the genome is frozen.
        """
        if self._fitness is None:
            raise StateViolation("the fitness of this genome has not been measured")
        return self._fitness

    @fitness.setter
    def fitness(self, fitness: float) -> None:
        if self._fitness is not None:
            raise StateViolation("the fitness of this genome has already been set")
        self._fitness = fitness

    def add_node(self, label: int, node_type: NodeType) -> None:
        """
        Add a node gene.

        Parameters:
            label:     Label of the node, not yet used in this genome
            node_type: One of INPUT, OUTPUT or HIDDEN (there is exactly one bias node)
        """
        self._check_unlocked()

        if not isinstance(node_type, NodeType):
            raise StructuralViolation(f"invalid node type {node_type!r}")
        if node_type == NodeType.BIAS:
            raise StructuralViolation("a genome has exactly one bias node")
        if label in self.node_genes:
            raise StructuralViolation(f"node {label} already exists")

        self.node_genes[label] = NodeGene(label, node_type)
        if node_type == NodeType.INPUT:
            self._num_inputs  += 1
        elif node_type == NodeType.OUTPUT:
            self._num_outputs += 1

    def add_connection(self,
                       node_in   : int,
                       node_out  : int,
                       weight    : float,
                       enabled   : bool,
                       innovation: int) -> None:
        """
        Add a connection gene between two nodes of this genome.

        Parameters:
            node_in:    Label of the source node
            node_out:   Label of the destination node
            weight:     Weight of the connection
            enabled:    Whether the connection is active
            innovation: Innovation number, not yet used in this genome
        """
        self._check_unlocked()

        if innovation in self.conn_genes:
            raise StructuralViolation(f"connection with innovation number {innovation} already exists")
        if node_in not in self.node_genes or node_out not in self.node_genes:
            raise StructuralViolation(f"cannot connect {node_in} to {node_out}: node does not exist")

        self.conn_genes[innovation] = ConnectionGene(node_in, node_out, weight, innovation, enabled)

    def _check_unlocked(self) -> None:
        if self._fitness is not None:
            raise StructuralViolation("cannot edit a genome after its fitness has been set")

    def clone_genome(self) -> 'Genome':
        """
        Create an independent copy of this genome.

        The copy has the same nodes and connections (with the same labels, weights,
        enabled flags and innovation numbers), shares the InnovationManager, and is
        unlocked: its fitness is not set.
        """
        clone = Genome(self._innovation_manager)
        for label, node in self.node_genes.items():
            if node.type != NodeType.BIAS:
                clone.add_node(label, node.type)
        for innovation, conn in self.conn_genes.items():
            clone.add_connection(conn.node_in, conn.node_out, conn.weight, conn.enabled, innovation)
        return clone

    def mutate(self, config: 'Config') -> None:
        """
        Apply to the current genome all possible mutation operations.

        The list of possible mutations is, in the order they are attempted:
          + mutate connection weights
          + add a node (splitting a connection)
          + add a connection
        Each mutation occurs randomly with a given probability.
        A genome without connections is left unchanged.

        Parameters:
            config: Stores configuration parameters
        """
        if self._fitness is not None:
            raise StateViolation("cannot mutate a genome after its fitness has been set")

        if not self.conn_genes:
            return

        if random.random() < config.weight_mutation_chance:
            self._mutate_weights(config)

        if random.random() < config.node_mutation_chance:
            self._mutate_add_node()

        if random.random() < config.link_mutation_chance:
            self._mutate_add_connection(config)

    def _mutate_weights(self, config: 'Config') -> None:
        for conn in self.conn_genes.values():
            conn.mutate(config)

    def _mutate_add_node(self) -> None:
        """
        Split an existing connection by adding a new node.

        The connection to split is selected at random from all connections;
        if the selected one is disabled nothing happens. Otherwise it is disabled
        and replaced by two new connections: input -> new node (weight = 1.0)
        and new node -> output (weight = old weight).
        """
        split_conn_gene = random.choice(list(self.conn_genes.values()))
        if not split_conn_gene.enabled:
            return

        # Labels are never skipped, so the node count is the first unused label
        new_node_id = len(self.node_genes)
        if new_node_id in self.node_genes:
            raise StructuralViolation(f"node labels are not contiguous: label {new_node_id} is taken")

        split_conn_gene.enabled = False
        self.add_node(new_node_id, NodeType.HIDDEN)

        node_in  = split_conn_gene.node_in
        node_out = split_conn_gene.node_out
        innov1   = self._innovation_manager.get_innovation_number(node_in, new_node_id)
        innov2   = self._innovation_manager.get_innovation_number(new_node_id, node_out)
        self.add_connection(node_in, new_node_id, 1.0, True, innov1)
        self.add_connection(new_node_id, node_out, split_conn_gene.weight, True, innov2)

    def _mutate_add_connection(self, config: 'Config') -> None:
        """
        Add a new connection between two existing nodes.

        The nodes representing the two ends of the new connection
        are selected at random, however we cannot add a connection:
         + between two bias/input nodes
         + ending at a bias or input node (the ends are swapped instead)
         + between two nodes already connected by a direct connection
        Self-loops and cycles are allowed.

        Nothing happens if every allowed connection is already present, so the
        search for a free pair of nodes always terminates.
        """
        num_nodes       = len(self.node_genes)
        max_connections = num_nodes * (num_nodes - self._num_inputs - 1)
        if len(self.conn_genes) >= max_connections:
            return

        connected_nodes = {(conn.node_in, conn.node_out) for conn in self.conn_genes.values()}
        node_IDs        = list(self.node_genes.keys())
        while True:
            node_in  = random.choice(node_IDs)
            node_out = random.choice(node_IDs)

            if self.node_genes[node_in].type.is_source and self.node_genes[node_out].type.is_source:
                continue
            if self.node_genes[node_out].type.is_source:
                node_in, node_out = node_out, node_in
            if (node_in, node_out) in connected_nodes:
                continue
            break

        innovation_num = self._innovation_manager.get_innovation_number(node_in, node_out)
        weight         = random.uniform(config.min_weight, config.max_weight)
        self.add_connection(node_in, node_out, weight, True, innovation_num)

    def write_inputs(self, inputs: dict[int, float]) -> None:
        """
        Set the values of the input nodes.

        Parameters:
            inputs: Maps the label of every input node to its value
        """
        if len(inputs) != self._num_inputs:
            raise InputContractViolation(f"expected {self._num_inputs} inputs, got {len(inputs)}")

        for label, value in inputs.items():
            node = self.node_genes.get(label)
            if node is None or node.type != NodeType.INPUT:
                raise InputContractViolation(f"node {label} is not an input node")
            node.set_value(value)

    def read_outputs(self) -> dict[int, float]:
        """
        Get the current values of the output nodes.

        Returns:
            Dictionary mapping the label of every output node to its value, ordered by label
        """
        outputs = {label: node.value
                   for label, node in sorted(self.node_genes.items())
                   if node.type == NodeType.OUTPUT}
        if len(outputs) != self._num_outputs:
            raise StructuralViolation(f"expected {self._num_outputs} outputs, found {len(outputs)}")
        return outputs

    def run(self) -> None:
        """
        Execute one synchronous propagation step.

        Every connection first delivers the current value of its source node,
        then every node fires; a node thus only sees values computed in the previous
        step. Signals need several steps to travel along paths with hidden nodes,
        which is why callers run a genome 'depth' times before reading the outputs.
        """
        self.node_genes[0].set_value(1.0)
        for innovation in sorted(self.conn_genes):
            self.conn_genes[innovation].transfer(self.node_genes)
        for node in self.node_genes.values():
            node.fire()

    def reset(self) -> None:
        """Set the value of every node to 0.0, except the bias node (1.0)."""
        for node in self.node_genes.values():
            node.reset()
        self.node_genes[0].set_value(1.0)

    def __str__(self):
        node_genes_str = ''.join(str(node) for _, node in sorted(self.node_genes.items()))
        conn_genes_str = ''.join(str(conn) for _, conn in sorted(self.conn_genes.items()))
        return f"Nodes: {node_genes_str}\nConns: {conn_genes_str}"

    def __repr__(self):
        fitness = 'None' if self._fitness is None else f"{self._fitness:.4f}"
        return (f"Genome(nodes={len(self.node_genes)}, connections={len(self.conn_genes)}, "
                f"fitness={fitness})")
