# forum/core/schemas.py

"""
응답 스키마 공통 베이스입니다.
응답 JSON의 필드명은 camelCase(userId, createdAt 등)로 직렬화됩니다.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
