# app/services/entry_service.py

import logging
from typing import Any, List, Optional

from app.models.entry_model import Entry
from app.schemas.auth_schema import AuthContext
from app.schemas.entry_schema import (
    BulkEntryCreateResult,
    CreatedEntry,
    FailedItem,
    parse_item,
)
from app.stores.ports import ChildDirectory
from app.utils.bulk_writer import BulkWriter
from app.utils.child_expander import expand_child_ids
from app.utils.entry_builder import build_entry, check_auth_context
from app.utils.entry_validator import validate_item
from app.utils.report_generator import DailyAggregator

logger = logging.getLogger(__name__)


def bulk_create_entries(
    auth: AuthContext,
    items: List[Any],
    directory: ChildDirectory,
    writer: BulkWriter,
    aggregator: Optional[DailyAggregator] = None,
) -> BulkEntryCreateResult:
    """
    Cria registros em lote (escopo professor):
    1) valida cada item; 2) expande as crianças; 3) monta um Entry por criança;
    4) grava em lotes; 5) recalcula os relatórios diários afetados.
    Itens inválidos vão para `failed` sem afetar os demais.
    """
    check_auth_context(auth)

    result = BulkEntryCreateResult()
    new_entries: List[Entry] = []

    for index, raw in enumerate(items):
        item = parse_item(raw)
        if item is None:
            result.failed.append(FailedItem(index=index, reason="invalid_item"))
            continue

        reason = validate_item(item)
        if reason:
            result.failed.append(FailedItem(index=index, reason=reason))
            continue

        child_ids = expand_child_ids(item, directory)
        if not child_ids:
            result.failed.append(FailedItem(index=index, reason="no_children"))
            continue

        for child_id in child_ids:
            entry = build_entry(auth, item, child_id)
            new_entries.append(entry)
            result.created.append(CreatedEntry(id=entry.id, type=entry.type))

    writer.commit(new_entries)

    logger.info(
        "bulk de %s itens: %s registros criados, %s itens com falha",
        len(items), len(result.created), len(result.failed),
    )

    if aggregator is not None and new_entries:
        try:
            aggregator.upsert_for_entries(new_entries)
        except Exception:
            # os registros já estão gravados; o relatório é recalculado no próximo disparo
            logger.exception("falha ao atualizar relatórios diários após o bulk")

    return result
