import numpy as np

# Sharpness of the sigmoid; 4.9 makes it close to linear in [-0.5, +0.5]
SIGMOID_STEEPNESS = 4.9

def sigmoid_activation(z: float) -> float:
    Z = -SIGMOID_STEEPNESS * z
    Z = np.clip(Z, -100, 100)   # to prevent under/overflow when calculating exp
    return float(1.0 / (1.0 + np.exp(Z)))
