from pydantic import BaseModel


class GenerationPolicy(BaseModel):
    """Политика обработки неоднозначных мест документа"""

    # Операция без тегов: ошибка (True) или пропуск (False)
    strict_tags: bool = True
    # Тело запроса обязательно уже при наличии requestBody, а не только при required: true
    body_required_by_presence: bool = False
    # Объявлять в models.ts псевдонимы для схем, не являющихся объектами
    type_aliases: bool = False
    multiline_models: bool = False
