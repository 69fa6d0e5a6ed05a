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
"""
Methods creating new orthomps tensors from scratch
and building configuration of orthomps tensors.
"""
from __future__ import annotations
from .tensor import Tensor, OrthompsError
from .tensor._auxliary import _config, _clear_inds
from .backend import backend_np

__all__ = ['make_config', 'rand', 'zeros', 'delta', 'to_tensor']


def make_config(**kwargs) -> _config:
    r"""
    Create structure with orthomps configuration

    Parameters
    ----------
    backend : backend module or str
        Specify ``backend`` providing linear algebra and base dense tensors.
        Currently supported backend is NumPy as ``orthomps.backend.backend_np``,
        which can be specified as string "np". Defaults to NumPy backend.

    default_dtype: str
        Default data type (dtype) of orthomps tensors. Supported options are: ``'float64'``,
        ``'complex128'``. If not specified, the default dtype is ``'float64'``.

    Example
    -------

    ::

        config = orthomps.make_config(backend='np', default_dtype='complex128')
    """
    if "backend" not in kwargs or kwargs["backend"] == 'np':
        kwargs["backend"] = backend_np
    elif isinstance(kwargs["backend"], str):
        raise OrthompsError("backend encoded as string only supports: 'np'")
    if kwargs.get("default_dtype", 'float64') not in ('float64', 'complex128'):
        raise OrthompsError("default_dtype should be 'float64' or 'complex128'.")
    return _config(**{a: kwargs[a] for a in _config._fields if a in kwargs})


def _dtype(config, kwargs):
    return kwargs['dtype'] if 'dtype' in kwargs else config.default_dtype


def rand(config=None, inds=(), **kwargs) -> orthomps.Tensor:
    r"""
    Initialize tensor filled with random numbers.

    Draws from a uniform distribution in [-1, 1] or [-1, 1] + 1j * [-1, 1],
    depending on desired ``dtype``.

    Parameters
    ----------
    config : module | _config(NamedTuple)
        :ref:`orthomps configuration <tensor/configuration:orthomps configuration>`
    inds : Sequence[orthomps.Index]
        Indices of the tensor.
    dtype : str
        Desired datatype, overrides :code:`default_dtype` specified in configuration.
    """
    config = make_config() if config is None else config
    inds = _clear_inds(inds)
    data = config.backend.rand(tuple(ind.dim for ind in inds), dtype=_dtype(config, kwargs))
    return Tensor(config=config, inds=inds, data=data)


def zeros(config=None, inds=(), **kwargs) -> orthomps.Tensor:
    r"""
    Initialize tensor filled with zeros, see :meth:`rand` for the parameters.
    """
    config = make_config() if config is None else config
    return Tensor(config=config, inds=_clear_inds(inds), dtype=_dtype(config, kwargs))


def delta(config=None, inds=(), **kwargs) -> orthomps.Tensor:
    r"""
    Kronecker delta (identity) between two indices of equal dimension.
    """
    config = make_config() if config is None else config
    inds = _clear_inds(inds)
    if len(inds) != 2 or inds[0].dim != inds[1].dim:
        raise OrthompsError('delta requires two indices of equal dimension.')
    data = config.backend.eye(inds[0].dim, dtype=_dtype(config, kwargs))
    return Tensor(config=config, inds=inds, data=data)


def to_tensor(val, inds, config=None, **kwargs) -> orthomps.Tensor:
    r"""
    Tensor with elements copied from array-like ``val``; its legs are labeled by ``inds``.

    Parameters
    ----------
    val : array_like
        Values reshaped to dimensions of ``inds``.
    dtype : str | None
        Desired datatype. If not given, inferred from ``val``.
    """
    config = make_config() if config is None else config
    inds = _clear_inds(inds)
    data = config.backend.to_tensor(val, Ds=tuple(ind.dim for ind in inds), dtype=kwargs.get('dtype', None))
    return Tensor(config=config, inds=inds, data=data)
