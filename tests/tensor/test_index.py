""" orthomps.Index; identity, priming and direct sums """
import pytest
import orthomps
from orthomps.sym import spin


def test_index_identity():
    i = orthomps.Index(3, orthomps.Site, 's')
    j = orthomps.Index(3, orthomps.Site, 's')
    assert i != j  # new identity
    assert i == i.prime().noprime()
    assert i != i.prime()
    assert i.prime(2) == i.prime().prime()
    assert hash(i) == hash(i.prime(3).noprime())
    k = i.sim()
    assert k != i and k.dim == i.dim and k.kind == i.kind
    assert str(i.prime(2)).endswith("''")


def test_index_direct_sum():
    qa = ((spin(1), 1), (spin(-1), 2))
    qb = ((spin(1), 2),)
    a = orthomps.Index(3, orthomps.Link, qns=qa)
    b = orthomps.Index(2, orthomps.Link, qns=qb)
    c = a.direct_sum(b)
    assert c.dim == 5 and c.kind == orthomps.Link
    assert c.qns == qa + qb
    assert c != a and c != b
    d = a.direct_sum(orthomps.Index(4))
    assert d.dim == 7 and d.qns is None


def test_index_exceptions():
    with pytest.raises(orthomps.OrthompsError):
        orthomps.Index(0)
    with pytest.raises(orthomps.OrthompsError):
        orthomps.Index(2, kind='Bond')
    with pytest.raises(orthomps.OrthompsError):
        orthomps.Index(3, qns=((spin(1), 1), (spin(-1), 1)))


if __name__ == '__main__':
    test_index_identity()
    test_index_direct_sum()
    test_index_exceptions()
