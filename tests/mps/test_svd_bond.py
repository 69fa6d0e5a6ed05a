""" Mps.svd_bond_; frontier bookkeeping, exact and density-matrix paths """
import logging
import numpy as np
import pytest
import orthomps
import orthomps.tn.mps as mps
try:
    from .configs import config_dense as cfg
except ImportError:
    from configs import config_dense as cfg

tol = 1e-10  #pylint: disable=invalid-name


class ProjectorStub:
    """ Perturbs the density matrix uniformly over the decomposed side. """

    def __init__(self):
        self.calls = 0

    def delta_rho(self, AA, inds, to):
        self.calls += 1
        Id = None
        for ind in inds:
            d = orthomps.delta(config=cfg, inds=(ind, ind.prime()))
            Id = d if Id is None else Id * d
        return Id


def two_site(psi, b):
    return psi[b] * psi[b + 1]


def test_svd_bond_frontiers():
    N = 6
    sites = mps.spin_half_sites(N)
    psi = mps.random_mps(sites, D_total=4, config=cfg)
    psi.position_(2)
    assert (psi.left_lim, psi.right_lim) == (1, 3)

    psi.svd_bond_(2, two_site(psi, 2), to='last')
    assert (psi.left_lim, psi.right_lim) == (2, 4)
    psi.svd_bond_(3, two_site(psi, 3), to='last')
    assert (psi.left_lim, psi.right_lim) == (3, 5)
    psi.svd_bond_(3, two_site(psi, 3), to='first')
    assert (psi.left_lim, psi.right_lim) == (2, 4)
    psi.svd_bond_(2, two_site(psi, 2), to='first')
    assert (psi.left_lim, psi.right_lim) == (1, 3)
    assert mps.check_canonical(psi)

    # frontiers on a chain that is not canonical
    phi = mps.random_mps(sites, D_total=4, config=cfg)
    phi.svd_bond_(0, two_site(phi, 0), to='last')
    assert (phi.left_lim, phi.right_lim) == (0, N)
    phi.svd_bond_(N - 2, two_site(phi, N - 2), to='first')
    assert (phi.left_lim, phi.right_lim) == (0, N - 1)
    assert not phi.is_ortho()
    phi.svd_bond_(1, two_site(phi, 1), to='last')
    assert (phi.left_lim, phi.right_lim) == (1, N - 1)


def test_svd_bond_preconditions(caplog):
    N = 6
    sites = mps.spin_half_sites(N)
    psi = mps.random_mps(sites, D_total=4, config=cfg)
    with caplog.at_level(logging.ERROR, logger='orthomps.tn.mps._mps'):
        with pytest.raises(orthomps.OrthompsError):
            psi.svd_bond_(2, two_site(psi, 2), to='last')  # b - 1 > left_lim
        with pytest.raises(orthomps.OrthompsError):
            psi.svd_bond_(2, two_site(psi, 2), to='first')  # b + 2 < right_lim
    assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 2
    assert (psi.left_lim, psi.right_lim) == (-1, N)

    with pytest.raises(orthomps.OrthompsError):
        psi.svd_bond_(N - 1, psi[N - 1], to='first')  # no such bond
    with pytest.raises(orthomps.OrthompsError):
        psi.svd_bond_(0, two_site(psi, 0), to='middle')


def test_svd_bond_exact():
    """ exact decomposition does not change the state """
    N = 5
    sites = mps.spin_half_sites(N)
    for dtype in ('float64', 'complex128'):
        psi = mps.random_mps(sites, D_total=4, config=cfg, dtype=dtype)
        psi.position_(1)
        ref = psi.copy()
        AA = two_site(psi, 1)
        spec = psi.svd_bond_(1, AA, to='last', opts={'use_svd': True})
        assert spec.truncerr < tol
        assert ((psi[1] * psi[2]) - AA).norm() < tol * AA.norm()
        assert abs(mps.overlap_c(psi, ref) / mps.overlap_c(ref, ref) - 1) < tol
        assert mps.check_ortho(psi, 1, left=True)

        spec = psi.svd_bond_(1, two_site(psi, 1), to='first')
        assert mps.check_ortho(psi, 2, left=False)
        assert psi.ortho_center() == 1
        assert abs(mps.overlap_c(psi, ref) / mps.overlap_c(ref, ref) - 1) < tol


def site_data(psi, n):
    """ data of site n with legs ordered as (left link, site, right link) """
    inds = (psi.left_link_ind(n), psi.sites[n], psi.right_link_ind(n))
    return psi[n].to_numpy(tuple(ind for ind in inds if ind is not None))


def test_svd_bond_product_lossless():
    """ basis product state is recovered exactly, up to signs of the site tensors """
    N = 4
    sites = mps.spin_half_sites(N)
    ref = mps.product_mps(sites, [0, 1, 1, 0], config=cfg)
    for to in ('last', 'first'):
        psi = mps.product_mps(sites, [0, 1, 1, 0], config=cfg)
        spec = psi.svd_bond_(0, two_site(psi, 0), to=to, opts={'use_svd': True})
        assert spec.D == 1 and psi.link_ind(0).dim == 1
        assert spec.truncerr == 0
        for n in psi.sweep():
            assert np.allclose(abs(site_data(psi, n)), abs(site_data(ref, n)), atol=tol)
        assert abs(mps.overlap(psi, ref) - 1) < tol


def test_svd_bond_normalize():
    N = 4
    sites = mps.spin_half_sites(N)
    psi = mps.random_mps(sites, D_total=4, config=cfg)
    psi.position_(1)
    psi.svd_bond_(1, two_site(psi, 1), to='last', opts={'normalize': True})
    assert psi.ortho_center() == 2 and abs(psi.norm() - 1) < tol
    psi.svd_bond_(1, two_site(psi, 1) * 3, to='first', opts={'normalize': True, 'cutoff': 1e-6})
    assert psi.ortho_center() == 1 and abs(psi.norm() - 1) < tol


def test_svd_bond_truncation():
    """ larger cutoff on the density-matrix path keeps fewer states and discards more weight """
    N = 8
    sites = mps.spin_half_sites(N)
    psi = mps.random_mps(sites, D_total=16, config=cfg)
    psi.position_(3)
    AA = two_site(psi, 3)
    Ds, errs = [], []
    for cutoff in (1e-12, 1e-6, 1e-3, 1e-2, 1e-1, 0.3):
        phi = psi.copy()
        spec = phi.svd_bond_(3, AA, to='last', opts={'cutoff': cutoff})
        assert spec.truncerr <= cutoff
        assert phi.link_ind(3).dim == spec.D
        Ds.append(spec.D)
        errs.append(spec.truncerr)
    assert all(D1 <= D0 for D0, D1 in zip(Ds, Ds[1:]))
    assert all(e1 >= e0 for e0, e1 in zip(errs, errs[1:]))

    phi = psi.copy()
    spec = phi.svd_bond_(3, AA, to='first', opts={'D_total': 3, 'D_min': 2})
    assert spec.D == 3 and phi.link_ind(3).dim == 3
    spec = phi.svd_bond_(3, phi[3] * phi[4], to='first', opts={'cutoff': 0.9, 'D_min': 2})
    assert spec.D == 2


def test_svd_bond_noise():
    """ density-matrix path informed by the projector """
    N = 4
    sites = mps.spin_half_sites(N)
    psi = mps.product_mps(sites, [0, 1, 0, 1], config=cfg)
    PH = ProjectorStub()
    spec = psi.svd_bond_(0, two_site(psi, 0), to='last', PH=PH, opts={'noise': 1e-4, 'cutoff': 1e-12})
    assert PH.calls == 1
    assert spec.D == 2  # noise enlarges the bond dimension
    assert (psi.left_lim, psi.right_lim) == (0, 2)
    assert mps.check_ortho(psi, 0, left=True)
    assert abs(psi.norm() - 1) < tol
    ref = mps.product_mps(sites, [0, 1, 0, 1], config=cfg)
    assert abs(mps.overlap(psi, ref) - 1) < tol

    spec = psi.svd_bond_(0, two_site(psi, 0), to='first', opts={'noise': 1e-4, 'cutoff': 1e-12})
    assert spec.D == 2
    assert psi.ortho_center() == 0 and mps.check_canonical(psi)
    assert abs(mps.overlap(psi, ref) - 1) < tol


if __name__ == '__main__':
    test_svd_bond_frontiers()
    test_svd_bond_exact()
    test_svd_bond_product_lossless()
    test_svd_bond_normalize()
    test_svd_bond_truncation()
    test_svd_bond_noise()
