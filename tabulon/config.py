import os

import torch

# Reserved metadata key holding user-facing column names.
LABELS_KEY = "labels"

DEFAULT_DTYPE = torch.float64

# Storage grows geometrically; both values may be overridden from the environment.
INITIAL_CAPACITY = int(os.getenv("TABULON_INITIAL_CAPACITY", 16))
GROWTH_FACTOR = int(os.getenv("TABULON_GROWTH_FACTOR", 2))

RENDER_RULE = "-" * 58
