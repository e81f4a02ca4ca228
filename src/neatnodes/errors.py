"""
NEAT Errors Module

This module defines the exceptions raised when a caller breaks the contract
of a genome, species or evaluation function. None of them is ever retried:
they signal programmer misuse and abort the operation immediately.

Classes:
    NeatError:                Base class of all errors raised by neatnodes
    StructuralViolation:      Invalid structural edit (duplicate label/marker, missing endpoint, ...)
    StateViolation:           Operation not permitted in the object's current state
    InputContractViolation:   Inputs whose arity (or labels) do not match the genome
    DegenerateInputViolation: Input for which a computation is meaningless
"""


class NeatError(Exception):
    """Base class for all errors raised by neatnodes."""


class StructuralViolation(NeatError, ValueError):
    """
    An edit would break the structure of a genome.

    Raised for duplicate node labels or innovation markers, connections with
    a missing endpoint, invalid node types, a second Bias node, or any
    structural edit to a genome whose fitness has already been set.
    """


class StateViolation(NeatError, RuntimeError):
    """
    An operation is not allowed in the current state of an object.

    Raised when reading a fitness that was never set, setting it twice,
    mutating a locked genome or adding members to a finalized species.
    """


class InputContractViolation(NeatError, ValueError):
    """The inputs handed to a genome do not match its input nodes."""


class DegenerateInputViolation(NeatError, ValueError):
    """The inputs are well-formed but the requested quantity is undefined for them."""
