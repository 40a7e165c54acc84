from pomdpformat.parsing.model import read_model, parse_tables, assemble_model
from pomdpformat.parsing.alpha import read_alpha, load_alpha_vectors
from pomdpformat.parsing.header import ModelHeader, extract_header
from pomdpformat.parsing.blocks import Explicit, RowVector, Matrix, locate_blocks, classify_block
