import sqlalchemy.types as types
from sqlalchemy import create_engine
from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base, declared_attr, scoped_session, sessionmaker

from . import codec
from .backends import Backend, get_backend
from .shamir import Share


class Base(object):
    @declared_attr
    def __tablename__(cls):
        return cls.__name__.lower()

    id = Column(Integer, primary_key=True)


Base = declarative_base(cls=Base)


def init(url: str = 'sqlite:///:memory:'):
    global engine, Session
    engine = create_engine(url)
    Session = scoped_session(sessionmaker(engine))
    Base.metadata.create_all(engine)
    return Session


class _BackendBoundType(types.TypeDecorator):
    impl = types.LargeBinary
    cache_ok = True

    def __init__(self, backend: Backend = None, *args, **kwargs):
        self.backend = backend or get_backend()
        super().__init__(*args, **kwargs)


class ShareType(_BackendBoundType):
    python_type = Share

    def process_bind_param(self, value, dialect):
        if value is not None:
            return codec.encode_share(value, self.backend)

    def process_result_value(self, value, dialect):
        if value is not None:
            return codec.decode_share(value, self.backend)


class GroupShareType(_BackendBoundType):
    python_type = Share

    def process_bind_param(self, value, dialect):
        if value is not None:
            return codec.encode_group_share(value, self.backend)

    def process_result_value(self, value, dialect):
        if value is not None:
            return codec.decode_group_share(value, self.backend)


class CommitmentVectorType(_BackendBoundType):
    python_type = list

    def process_bind_param(self, value, dialect):
        if value is not None:
            return codec.encode_commitments(value, self.backend)

    def process_result_value(self, value, dialect):
        if value is not None:
            return codec.decode_commitments(value, self.backend)
