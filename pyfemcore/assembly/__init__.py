from .assembler import (SparsityPatternError, COOAssembler, CSCAssembler, clear,
                        assemble_add, to_dense)
from .local_assembler import PoissonElt, element_dR
__all__ = ['SparsityPatternError', 'COOAssembler', 'CSCAssembler', 'clear',
           'assemble_add', 'to_dense', 'PoissonElt', 'element_dR']
