"""Front-ends that drive the checkers engine."""
