# app/utils/child_expander.py

from typing import List

from app.schemas.entry_schema import EntryCreateInput
from app.stores.ports import ChildDirectory


def expand_child_ids(item: EntryCreateInput, directory: ChildDirectory) -> List[str]:
    """
    Resolve as crianças alvo de um item.
    Com applyToAllInClass, soma os ids explícitos a todas as crianças da turma.
    Ids repetidos aparecem uma única vez (ordem da primeira ocorrência).
    """
    child_ids = list(item.child_ids)

    if item.apply_to_all_in_class and item.class_id:
        child_ids.extend(directory.ids_in_class(item.class_id))

    return list(dict.fromkeys(child_ids))
