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
"""Support of numpy as a data structure used by orthomps."""
from functools import reduce
import numpy as np
import scipy.linalg


# non-deterministic initialization of random number generator
rng = {'rng': np.random.default_rng(None)}  # initialize random number generator
BACKEND_ID = "np"
DTYPE = {'float64': np.float64,
         'complex128': np.complex128}


def get_dtype(t):
    return t.dtype


def is_complex(x):
    return np.iscomplexobj(x)


def random_seed(seed):
    rng['rng'] = np.random.default_rng(seed)


###################################
#     single tensor operations    #
###################################


def copy(x):
    return x.copy()


def to_numpy(x):
    return x if isinstance(x, (int, float, complex)) else x.copy()


def get_shape(x):
    return x.shape


def real(x):
    return np.real(x)


def conj(data):
    return data.conj()


def transpose(data, axes):
    return data.transpose(axes)


def reshape(data, shape):
    return data.reshape(shape)


def diag_create(x):
    return np.diag(x)


#########################
#    output numbers     #
#########################


def item(x):
    return x.item()


def norm(data):
    """ Frobenius norm. """
    return np.linalg.norm(data)


def trace(data):
    return np.trace(data)


##########################
#     setting values     #
##########################


def zeros(D, dtype='float64', **kwargs):
    return np.zeros(D, dtype=DTYPE[dtype])


def eye(D, dtype='float64', **kwargs):
    return np.eye(D, dtype=DTYPE[dtype])


def rand(D, dtype='float64', **kwargs):
    if dtype == 'float64':
        return 2 * rng['rng'].random(D) - 1
    return 2 * (rng['rng'].random(D) + 1j * rng['rng'].random(D)) - (1 + 1j)  # dtype == 'complex128


def to_tensor(val, Ds=None, dtype='float64', **kwargs):
    if dtype is None:
        T = np.array(val)
        if not np.iscomplexobj(T):
            T = T.astype(np.float64)
    else:
        T = np.array(val, dtype=DTYPE[dtype])
    return T if Ds is None else T.reshape(Ds)


def promote_dtype(*datas):
    return reduce(np.promote_types, (data.dtype for data in datas))


def block_embed(D, dtype, blocks):
    """ Zero-padded array of shape ``D`` with each (slices, data) block written in place. """
    newdata = np.zeros(D, dtype=dtype)
    for slcs, data in blocks:
        newdata[slcs] = data
    return newdata


#####################################################
#            contractions and decompositions        #
#####################################################


def tensordot(Adata, Bdata, axes):
    return np.tensordot(Adata, Bdata, axes=axes)


def safe_svd(a):
    try:
        U, S, V = scipy.linalg.svd(a, full_matrices=False)  # , lapack_driver='gesdd'
    except scipy.linalg.LinAlgError:  # pragma: no cover
        U, S, V = scipy.linalg.svd(a, full_matrices=False, lapack_driver='gesvd')
    return U, S, V


def fix_svd_signs(U, V):
    Uamp = (abs(U) * (2 ** 40)).astype(np.int64)
    ii = np.argmax(Uamp, axis=0).reshape(1, -1)
    phase = np.take_along_axis(U, ii, axis=0)
    phase = phase / abs(phase)
    U = U * phase.conj().reshape(1, -1)
    V = V * phase.reshape(-1, 1)
    return U, V


def svd(data, fix_signs=False):
    U, S, V = safe_svd(data)
    if fix_signs:
        U, V = fix_svd_signs(U, V)
    return U, S, V


def eigh(data):
    """ Eigenvalues in descending order and the corresponding eigenvectors. """
    try:
        S, U = scipy.linalg.eigh(data)
    except scipy.linalg.LinAlgError:  # pragma: no cover
        S, U = np.linalg.eigh(data)
    return S[::-1].copy(), U[:, ::-1].copy()


#############
#   tests   #
#############


def is_independent(x, y):
    """
    check if two arrays are identical, or share the same view.
    """
    return (x is not y) and (x.base is not y) and (x is not y.base)
