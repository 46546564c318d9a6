"""Item browser application built on the flowkit flow-controller tree."""
