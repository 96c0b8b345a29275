# app/utils/bulk_writer.py

import logging
from typing import List, Sequence

from app.models.entry_model import Entry
from app.stores.ports import EntryStore
from config.settings import ENTRY_BATCH_CHUNK_SIZE

logger = logging.getLogger(__name__)


class BulkCommitError(Exception):
    """
    Falha ao gravar um lote. Os lotes anteriores a `chunk_index` já estão
    gravados; o lote com falha e os seguintes não foram aplicados.
    """

    def __init__(self, chunk_index: int, committed_count: int):
        super().__init__(
            f"commit_failed no lote {chunk_index} ({committed_count} registros já gravados)"
        )
        self.chunk_index = chunk_index
        self.committed_count = committed_count


def chunked(items: Sequence, size: int) -> List[list]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class BulkWriter:
    def __init__(self, store: EntryStore, chunk_size: int = ENTRY_BATCH_CHUNK_SIZE):
        if chunk_size < 1 or chunk_size >= store.max_batch_writes:
            raise ValueError(
                f"chunk_size deve ficar entre 1 e {store.max_batch_writes - 1}, recebido {chunk_size}"
            )
        self.store = store
        self.chunk_size = chunk_size

    def commit(self, entries: List[Entry]) -> List[Entry]:
        """
        Grava os registros em lotes sequenciais, cada lote atômico.
        Retorna os registros gravados; em caso de falha lança BulkCommitError.
        """
        committed: List[Entry] = []

        for index, part in enumerate(chunked(entries, self.chunk_size)):
            try:
                self.store.batch_put(part)
            except Exception as exc:
                logger.exception(
                    "falha ao gravar lote %s de registros (%s já gravados)",
                    index, len(committed),
                )
                raise BulkCommitError(index, len(committed)) from exc

            committed.extend(part)
            logger.debug("lote %s gravado com %s registros", index, len(part))

        return committed
