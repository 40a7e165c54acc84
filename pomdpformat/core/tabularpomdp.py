import logging
from collections import namedtuple
from typing import Sequence
import numpy as np
from frozendict import frozendict

from pomdpformat.core.namespace import NameSpace
from pomdpformat.core.utils.funcutils import readonly

logger = logging.getLogger(__name__)

Belief = namedtuple("Belief", "states probs")

class TabularPOMDP:
    """
    A POMDP given entirely by its matrices, as read from a model file.

    Layouts follow the file format:
        transition_matrix[s, a, ns]
        observation_matrix[o, a, ns]
        reward_matrix[s, a]

    All arrays are read-only. The probability invariants (rows of T and
    columns of O sum to one) are not enforced here; see `is_normalized`.
    """
    def __init__(
        self,
        transition_matrix : np.array,
        reward_matrix : np.array,
        observation_matrix : np.array,
        discount_rate : float,
        *,
        state_list : Sequence[str] = None,
        action_list : Sequence[str] = None,
        observation_list : Sequence[str] = None,
        initial_state_vec : np.array = None,
        values : str = "reward",
    ):
        transition_matrix = readonly(transition_matrix)
        reward_matrix = readonly(reward_matrix)
        observation_matrix = readonly(observation_matrix)
        n_states, n_actions, _ = transition_matrix.shape
        n_obs = observation_matrix.shape[0]
        assert n_states \
            == transition_matrix.shape[2] \
            == observation_matrix.shape[2] \
            == reward_matrix.shape[0]
        assert n_actions \
            == observation_matrix.shape[1] \
            == reward_matrix.shape[1]

        if state_list is None:
            state_list = NameSpace.from_count(n_states, "state")
        if action_list is None:
            action_list = NameSpace.from_count(n_actions, "action")
        if observation_list is None:
            observation_list = NameSpace.from_count(n_obs, "observation")
        if initial_state_vec is None:
            initial_state_vec = np.ones(n_states)/n_states
        assert len(state_list) == n_states
        assert len(action_list) == n_actions
        assert len(observation_list) == n_obs
        assert len(initial_state_vec) == n_states

        self.transition_matrix = transition_matrix
        self.reward_matrix = reward_matrix
        self.observation_matrix = observation_matrix
        self.discount_rate = float(discount_rate)
        self.state_list = NameSpace(state_list, "state")
        self.action_list = NameSpace(action_list, "action")
        self.observation_list = NameSpace(observation_list, "observation")
        self.initial_state_vec = readonly(initial_state_vec)
        self.values = values

    def __repr__(self):
        return (
            f"{self.__class__.__name__}("
            f"states={len(self.state_list)}, "
            f"actions={len(self.action_list)}, "
            f"observations={len(self.observation_list)}, "
            f"discount_rate={self.discount_rate})"
        )

    def as_matrices(self):
        return frozendict({
            'ss': self.state_list,
            'aa': self.action_list,
            'oo': self.observation_list,
            'tf': self.transition_matrix,
            'rf': self.reward_matrix,
            'obs': self.observation_matrix,
            's0': self.initial_state_vec,
            'discount': self.discount_rate,
        })

    def initial_belief(self) -> Belief:
        return Belief(tuple(self.state_list), tuple(self.initial_state_vec))

    def is_normalized(self, atol=1e-8) -> bool:
        """
        True if every T[s, a, :] and every O[:, a, ns] sums to one.
        """
        tf_ok = np.allclose(self.transition_matrix.sum(axis=2), 1, atol=atol)
        obs_ok = np.allclose(self.observation_matrix.sum(axis=0), 1, atol=atol)
        if not tf_ok:
            logger.info("Transition rows do not all sum to 1")
        if not obs_ok:
            logger.info("Observation distributions do not all sum to 1")
        return bool(tf_ok and obs_ok)

    def state_estimator_vec(self, b : np.array, ai : int, oi : int) -> np.array:
        """
        Returns the posterior distribution over next states
        given an action, observation, and belief over previous states.

        Takes action/observations as indices.
        """
        dist = np.einsum('s,sn,n->n', b, self.transition_matrix[:, ai, :], self.observation_matrix[oi, ai, :])
        if dist.sum() == 0.0:
            return dist
        return dist/dist.sum()

    def predictive_observation_vec(self, b : np.array, ai : int) -> np.array:
        """
        Returns the predicted observation distribution for taking
        an action given a belief distribution.
        """
        return np.einsum('s,sn,on->o', b, self.transition_matrix[:, ai, :], self.observation_matrix[:, ai, :])
