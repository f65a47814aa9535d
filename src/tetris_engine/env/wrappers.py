from __future__ import annotations

import numpy as np
import gymnasium as gym


class ResampleRejectedActionWrapper(gym.Wrapper):
    """If a sampled action would be rejected, resample uniformly among accepted ones.

    Useful for random or untrained agents that would otherwise bump into walls.
    """

    def step(self, action):  # type: ignore[override]
        mask = self.get_action_mask()
        if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
            valid_idxs = np.flatnonzero(mask)
            if valid_idxs.size > 0:
                action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        return self.env.unwrapped.get_action_mask()
