from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """API JSON은 camelCase, 파이썬 쪽은 snake_case.

    populate_by_name: 요청 본문은 두 형식 모두 허용
    from_attributes:  SQLModel 행에서 바로 변환
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
