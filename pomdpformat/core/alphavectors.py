import numpy as np
from pomdpformat.core.tabularpomdp import Belief
from pomdpformat.core.utils.funcutils import readonly

class AlphaVectors:
    """
    A piecewise-linear value function read from a value-function file.

    `alpha_vectors[:, d]` holds the coefficients of the d-th hyperplane
    and `alpha_actions[d]` the 0-based index of the action it belongs to.
    The value of a belief is the largest dot product with any column;
    the best action is the one attached to that column.
    """
    def __init__(self, alpha_vectors : np.array, alpha_actions : np.array):
        alpha_vectors = readonly(alpha_vectors)
        alpha_actions = np.array(alpha_actions, dtype=int)
        alpha_actions.setflags(write=False)
        assert alpha_vectors.ndim == 2
        assert alpha_vectors.shape[1] == len(alpha_actions)
        self.alpha_vectors = alpha_vectors
        self.alpha_actions = alpha_actions

    def __len__(self):
        return self.alpha_vectors.shape[1]

    @property
    def n_states(self) -> int:
        return self.alpha_vectors.shape[0]

    def __repr__(self):
        return f"{self.__class__.__name__}(n_states={self.n_states}, n_vectors={len(self)})"

    def _belief_to_vector(self, belief):
        if isinstance(belief, Belief):
            ss, b = belief
            assert len(ss) == len(b)
        else:
            b = belief
        b = np.asarray(b, dtype=float)
        assert b.shape == (self.n_states,), \
            f"belief has {b.shape[0]} entries, alpha vectors have {self.n_states}"
        return b

    def vector_values(self, belief) -> np.array:
        b = self._belief_to_vector(belief)
        return np.einsum("sd,s->d", self.alpha_vectors, b)

    def best_vector(self, belief) -> int:
        return int(np.argmax(self.vector_values(belief)))

    def value(self, belief) -> float:
        return float(np.max(self.vector_values(belief)))

    def best_action(self, belief) -> int:
        return int(self.alpha_actions[self.best_vector(belief)])
