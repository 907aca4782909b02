from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# SQLite only autoincrements INTEGER primary keys.
IdType = BigInteger().with_variant(Integer, "sqlite")


def enum_values(enum_cls):
    return [member.value for member in enum_cls]
