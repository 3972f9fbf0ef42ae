from .meshgen import (mesh_create1d, mesh_block2d_P1, mesh_block2d_P2,
                      mesh_block2d_S2, mesh_block2d_T1)
__all__ = ['mesh_create1d', 'mesh_block2d_P1', 'mesh_block2d_P2',
           'mesh_block2d_S2', 'mesh_block2d_T1']
