"""Default sampler settings shared by the estimation layer and run configs."""

DEFAULT_NUM_BINS = 100
DEFAULT_SAMPLE_POINTS = 100_000
DEFAULT_STEP_SIZE = 0.01
DEFAULT_SEED = 42
