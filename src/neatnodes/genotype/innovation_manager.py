"""
NEAT Innovation Manager Module

This module implements the InnovationManager class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    InnovationManager: Per-run ledger of innovation numbers
"""

class InnovationManager:
    """
    Hands out innovation numbers for new connections.

    Within one generation, every genome that grows a connection between the
    same pair of nodes receives the same innovation number, so that the
    structurally identical genes line up during crossover. The lookup table is
    cleared at the start of every generation; the counter is not, so the same
    pair rediscovered in a later generation receives a new number.

    One instance is created per run and shared by every genome of that run.

    Public Methods:
        get_innovation_number(node_in, node_out): Innovation number for a connection
        new_generation():                          Forget this generation's innovations
    """

    def __init__(self):
        # Innovations of the current generation: (node_in, node_out) -> innovation number
        self._innovation_numbers: dict[tuple[int, int], int] = {}

        # Innovation numbers start at 1
        self._current_innovation_number: int = 0

    @property
    def current_innovation_number(self) -> int:
        """The most recently allocated innovation number (0 if none)."""
        return self._current_innovation_number

    def get_innovation_number(self, node_in: int, node_out: int) -> int:
        """
        Get innovation number for a connection, identified by its endpoints.
        Returns the existing innovation number if this connection was created
        earlier in the current generation, otherwise assigns a new one.

        Parameters:
            node_in:  label of the 'from' end of the connection
            node_out: label of the 'to'   end of the connection

        Returns:
            The innovation number
        """
        key = (node_in, node_out)
        if key not in self._innovation_numbers:
            self._current_innovation_number += 1
            self._innovation_numbers[key]    = self._current_innovation_number
        return self._innovation_numbers[key]

    def new_generation(self) -> None:
        """Clear the lookup table; innovation numbers keep increasing."""
        self._innovation_numbers = {}

    def __len__(self):
        return len(self._innovation_numbers)
