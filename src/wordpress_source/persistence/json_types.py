# ABOUTME: Pydantic TypeAdapter solution for JSON columns in SQLModel
# ABOUTME: Stores normalized node fields, including nested pydantic values, as JSON

from pydantic import TypeAdapter
from sqlalchemy import TypeDecorator
from sqlmodel import JSON


class PydanticJson(TypeDecorator):
    """
    A SQLAlchemy TypeDecorator that uses Pydantic's TypeAdapter for JSON serialization
    and deserialization, so references and asset descriptors inside node fields are
    dumped without a hand-written encoder.
    """

    impl = JSON()
    cache_ok = True

    def __init__(self, pt):
        super().__init__()
        self.pt = TypeAdapter(pt)
        self.coerce_compared_value = self.impl.coerce_compared_value

    def process_bind_param(self, value, dialect):
        return self.pt.dump_python(value, mode="json") if value is not None else None

    def process_result_value(self, value, dialect):
        return self.pt.validate_python(value) if value is not None else None
