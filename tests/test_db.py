import pytest
from sqlalchemy import Column, types

from pyvss import db, feldman
from pyvss.backends import get_backend
from pyvss.shamir import Share

secp256k1 = get_backend('secp256k1')


class StoredShare(db.Base):
    label = Column(types.String(64), index=True)
    share = Column(db.ShareType(secp256k1))
    public_share = Column(db.GroupShareType(secp256k1))
    commitments = Column(db.CommitmentVectorType(secp256k1))


@pytest.fixture
def session():
    Session = db.init()
    yield Session
    Session.remove()


def test_shares_and_commitments_survive_storage(session, rng):
    shares, verifier = feldman.split(42, 3, 5, secp256k1, rng)
    for share in shares:
        session.add(StoredShare(
            label='dealing',
            share=share,
            public_share=Share(share.identifier, secp256k1.base_mul(share.value)),
            commitments=verifier.commitments,
        ))
    session.commit()

    stored = session.query(StoredShare).filter(StoredShare.label == 'dealing').order_by(StoredShare.id).all()
    assert [row.share for row in stored] == shares
    for row in stored:
        assert verifier.verify(row.share)
        assert secp256k1.point_eq(row.public_share.value, secp256k1.base_mul(row.share.value))
        assert row.commitments == verifier.commitments


def test_null_columns(session):
    session.add(StoredShare(label='empty'))
    session.commit()
    row = session.query(StoredShare).filter(StoredShare.label == 'empty').one()
    assert row.share is None
    assert row.commitments is None
