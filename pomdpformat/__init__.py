from pomdpformat.errors import FormatError, NumericParseError
from pomdpformat.core import TabularPOMDP, AlphaVectors, NameSpace, Belief
from pomdpformat.parsing import read_model, read_alpha, load_alpha_vectors
