from pomdpformat.core.namespace import NameSpace, WILDCARD
from pomdpformat.core.tabularpomdp import TabularPOMDP, Belief
from pomdpformat.core.alphavectors import AlphaVectors
