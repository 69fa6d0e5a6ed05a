# Copyright 2024 The orthomps Authors. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
r"""
orthomps.Tensor

This class defines a dense tensor of arbitrary rank with named legs.
Each leg is labeled by an :class:`orthomps.Index` and tensors are contracted over the indices they share,
so the order of legs is an implementation detail invisible to the caller.
"""
from __future__ import annotations
from ._auxliary import _config
from ._index import Index, Link, Site
from ._tests import OrthompsError, _test_inds
from ._tests import *
from ._contractions import *
from ._output import *
from ._single import *
from ._algebra import *
from .linalg import *
from . import _tests
from . import _contractions
from . import _output
from . import _single
from . import _algebra
from . import linalg
__all__ = ['Tensor', 'Index', 'Link', 'Site', 'linalg', 'OrthompsError']
__all__.extend(linalg.__all__)
__all__.extend(_tests.__all__)
__all__.extend(_contractions.__all__)
__all__.extend(_single.__all__)
__all__.extend(_algebra.__all__)
__all__.extend(_output.__all__)


class Tensor:
    # Class defining a dense tensor with named legs, and operations on such tensor(s).

    def __init__(self, config=None, inds=(), data=None, **kwargs):
        r"""
        Initialize orthomps tensor.

        Parameters
        ----------
            config : module | _config(NamedTuple)
                :ref:`orthomps configuration <tensor/configuration:orthomps configuration>`;
                if ``None``, use numpy backend.
            inds : Sequence[orthomps.Index]
                indices labeling consecutive legs of ``data``.
            data : backend array
                If ``None``, the tensor is filled with zeros of dtype ``kwargs['dtype']``
                or the config default.
        """
        if config is None:
            config = _config()
        self.config = config if isinstance(config, _config) else _config(**{a: getattr(config, a) for a in _config._fields if hasattr(config, a)})
        self.inds = tuple(inds)
        if data is None:
            dtype = kwargs['dtype'] if 'dtype' in kwargs else self.config.default_dtype
            data = self.config.backend.zeros(tuple(ind.dim for ind in self.inds), dtype=dtype)
        self._data = data
        _test_inds(self.inds, self.config.backend.get_shape(self._data))

    __array_ufunc__ = None  # np.float64 * Tensor falls back to Tensor.__rmul__

    # pylint: disable=C0415
    from .linalg import norm, svd, denmat_decomp
    from ._contractions import contract
    from ._algebra import __add__, __sub__, __mul__, __rmul__, __truediv__, __neg__
    from ._single import conj, copy, prime, noprime, permute, replace_inds
    from ._output import __str__, __repr__, is_complex, item, to_numpy
    from ._output import get_shape, common_index, unique_inds, inds_of_kind, index_position

    def _replace(self, **kwargs) -> Tensor:
        """ Creates a shallow copy replacing fields specified in kwargs. """
        for arg in ('config', 'inds', 'data'):
            if arg not in kwargs:
                kwargs[arg] = getattr(self, arg)
        return Tensor(**kwargs)

    @property
    def ndim(self) -> int:
        r""" Rank of the tensor. """
        return len(self.inds)

    @property
    def dtype(self) -> 'numpy.dtype':
        """ Datatype ``dtype`` of tensor data used by the ``backend``. """
        return self.config.backend.get_dtype(self._data)

    @property
    def data(self) -> 'numpy.array':
        """ Return the underlying dense array, with legs ordered as in ``self.inds``. """
        return self._data

    @property
    def shape(self) -> tuple[int]:
        return self.get_shape()
