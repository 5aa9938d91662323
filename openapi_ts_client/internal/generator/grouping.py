from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from ..errors import MissingTagsError

# Порядок методов внутри группы фиксирован и не зависит от документа
HTTP_VERBS: Tuple[str, ...] = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
)


@dataclass(frozen=True)
class OperationEntry:
    """Операция вместе с путем, на котором она объявлена"""

    path: str
    operation: Dict[str, Any]


# verb -> операции в порядке путей документа
OperationGroup = Dict[str, List[OperationEntry]]
OperationGroupTable = Dict[str, OperationGroup]


def group_operations(
    paths: Dict[str, Any], strict: bool = True
) -> OperationGroupTable:
    """
    Разбивка всех операций по тегам.

    Для каждого тега строится таблица verb -> [OperationEntry, ...]: один
    и тот же метод на разных путях дает несколько записей в одном слоте.
    Операция с несколькими тегами попадает в каждую группу, объект
    операции общий.

    Args:
        paths: Раздел paths документа
        strict: Ошибка для операции без тегов (иначе операция пропускается)

    Returns:
        Таблица tag -> {verb: [OperationEntry, ...]}

    Raises:
        MissingTagsError: Операция без тегов в строгом режиме
    """
    table: OperationGroupTable = {}

    for path, path_item in (paths or {}).items():
        # Расширения x-... в разделе paths
        if path.startswith("x-") or not isinstance(path_item, dict):
            continue

        for verb in HTTP_VERBS:
            operation = path_item.get(verb)
            if not isinstance(operation, dict):
                continue

            tags = operation.get("tags")
            if not tags:
                if strict:
                    raise MissingTagsError(path, verb)
                continue

            for tag in tags:
                # Группа создается при первом использовании
                group = table.setdefault(tag, {})
                group.setdefault(verb, []).append(
                    OperationEntry(path=path, operation=operation)
                )

    return table
