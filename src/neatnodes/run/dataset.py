"""
NEAT DataSet Module

This module implements the DataSet class: a table of input/output examples
describing the function that the evolved networks should compute.

Classes:
    DataSet: Input/output examples, with optional per-row weights
"""

import csv
import numpy as np

class DataSet:
    """
    A set of input/output examples of the function to be learned.

    Each row holds the values of the inputs, the expected values of the outputs
    and, optionally, a weight stating how much the row counts when measuring
    fitness (rows are weighted 1.0 when no weights are given).

    Public Properties:
        num_inputs:  Number of inputs of the function
        num_outputs: Number of outputs of the function
        num_entries: Number of rows
        is_weighted: Whether rows carry weights

    Public Methods:
        get_inputs_for_row(row):  Input values of a row
        get_outputs_for_row(row): Expected output values of a row
        get_weight_for_row(row):  Weight of a row

    Class Methods:
        from_csv(path): Load a DataSet from a CSV file
    """

    def __init__(self, inputs, outputs, weights=None):
        """
        Parameters:
            inputs:  2D array-like, one row per example, one column per input
            outputs: 2D array-like, one row per example, one column per output
            weights: optional 1D array-like, one weight per example
        """
        self._inputs : np.ndarray        = np.atleast_2d(np.asarray(inputs,  dtype=float))
        self._outputs: np.ndarray        = np.atleast_2d(np.asarray(outputs, dtype=float))
        self._weights: np.ndarray | None = None if weights is None else np.asarray(weights, dtype=float)

        if self._inputs.ndim != 2 or self._outputs.ndim != 2:
            raise ValueError("inputs and outputs must be 2-dimensional")
        if self._inputs.shape[0] != self._outputs.shape[0]:
            raise ValueError(f"{self._inputs.shape[0]} rows of inputs but {self._outputs.shape[0]} rows of outputs")
        if self._inputs.shape[1] == 0 or self._outputs.shape[1] == 0:
            raise ValueError("a DataSet needs at least one input and one output")
        if self._weights is not None and self._weights.shape != (self._inputs.shape[0],):
            raise ValueError("there must be exactly one weight per row")
        for array in (self._inputs, self._outputs, self._weights):
            if array is not None and not np.all(np.isfinite(array)):
                raise ValueError("all values must be finite numbers")

    @classmethod
    def from_csv(cls, path: str) -> 'DataSet':
        """
        Load a DataSet from a CSV file.

        The header row names each column "input", "output" or "weight". All input
        columns come first, then all output columns, then (optionally) a single
        weight column. Every other row holds one number per column.

        Parameters:
            path: Path to the CSV file

        Returns:
            The DataSet
        """
        with open(path, newline='') as csv_file:
            rows = [row for row in csv.reader(csv_file) if row]

        if not rows:
            raise ValueError(f"no CSV header row found in '{path}'")

        header = [column.strip() for column in rows[0]]
        num_inputs  = 0
        num_outputs = 0
        has_weights = False
        for column in header:
            if has_weights:
                raise ValueError("the weight column must be the last column")
            if column == "input" and num_outputs == 0:
                num_inputs  += 1
            elif column == "output" and num_inputs > 0:
                num_outputs += 1
            elif column == "weight" and num_outputs > 0:
                has_weights  = True
            else:
                raise ValueError(f"CSV headers are named incorrectly: {header}")
        if num_outputs == 0:
            raise ValueError("both inputs and outputs must be provided")

        if any(len(row) != len(header) for row in rows[1:]):
            raise ValueError("entries do not align with column headers")
        try:
            data = np.array([[float(value) for value in row] for row in rows[1:]], dtype=float)
        except ValueError as e:
            raise ValueError("all values must be numbers and cannot be blank") from e

        data    = data.reshape(-1, len(header))
        inputs  = data[:, :num_inputs]
        outputs = data[:, num_inputs:num_inputs + num_outputs]
        weights = data[:, -1] if has_weights else None
        return cls(inputs, outputs, weights)

    @property
    def num_inputs(self) -> int:
        return self._inputs.shape[1]

    @property
    def num_outputs(self) -> int:
        return self._outputs.shape[1]

    @property
    def num_entries(self) -> int:
        return self._inputs.shape[0]

    @property
    def is_weighted(self) -> bool:
        return self._weights is not None

    def get_inputs_for_row(self, row: int) -> list[float]:
        return self._inputs[row].tolist()

    def get_outputs_for_row(self, row: int) -> list[float]:
        return self._outputs[row].tolist()

    def get_weight_for_row(self, row: int) -> float:
        if self._weights is None:
            return 1.0
        return float(self._weights[row])

    def __len__(self):
        return self.num_entries

    def __repr__(self):
        return (f"DataSet(num_inputs={self.num_inputs}, num_outputs={self.num_outputs}, "
                f"num_entries={self.num_entries}, is_weighted={self.is_weighted})")
