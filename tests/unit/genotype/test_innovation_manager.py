"""
Unit tests for InnovationManager class.
"""

import pytest

from neatnodes.genotype.innovation_manager import InnovationManager


class TestInnovationManager:
    """Test innovation number allocation."""

    def test_first_innovation_number_is_one(self, innovation_manager):
        assert innovation_manager.current_innovation_number == 0
        assert innovation_manager.get_innovation_number(3, 5) == 1
        assert innovation_manager.current_innovation_number == 1

    def test_new_pairs_get_consecutive_numbers(self, innovation_manager):
        assert innovation_manager.get_innovation_number(3, 5) == 1
        assert innovation_manager.get_innovation_number(8, 2) == 2

    def test_same_pair_same_number(self, innovation_manager):
        first = innovation_manager.get_innovation_number(3, 5)
        innovation_manager.get_innovation_number(8, 2)
        assert innovation_manager.get_innovation_number(3, 5) == first
        assert innovation_manager.get_innovation_number(8, 2) == 2
        assert innovation_manager.current_innovation_number == 2

    def test_pairs_are_ordered(self, innovation_manager):
        assert innovation_manager.get_innovation_number(8, 2) == 1
        assert innovation_manager.get_innovation_number(2, 8) == 2

    def test_self_loop_pair(self, innovation_manager):
        assert innovation_manager.get_innovation_number(4, 4) == 1
        assert innovation_manager.get_innovation_number(4, 4) == 1

    def test_new_generation_clears_table_not_counter(self, innovation_manager):
        innovation_manager.get_innovation_number(3, 5)
        innovation_manager.get_innovation_number(8, 2)
        innovation_manager.get_innovation_number(2, 8)
        innovation_manager.get_innovation_number(1, 1)
        assert len(innovation_manager) == 4

        innovation_manager.new_generation()
        assert len(innovation_manager) == 0
        assert innovation_manager.current_innovation_number == 4

        # The same pair rediscovered in a later generation gets a new number
        assert innovation_manager.get_innovation_number(2, 8) == 5
        assert innovation_manager.get_innovation_number(3, 5) == 6
        assert innovation_manager.get_innovation_number(2, 8) == 5

    def test_instances_are_independent(self):
        manager1 = InnovationManager()
        manager2 = InnovationManager()
        manager1.get_innovation_number(1, 2)
        manager1.get_innovation_number(1, 3)
        assert manager2.get_innovation_number(1, 3) == 1
