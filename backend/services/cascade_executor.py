# backend/services/cascade_executor.py

import time
from dataclasses import dataclass
from typing import Tuple

from flask import current_app

from .deletion_errors import TransactionError
from .deletion_store import DeletionStore


@dataclass(frozen=True)
class DeletionOutcome:
    """Contagens `(tipo, linhas removidas)` de cada passo, na ordem do plano."""
    counts: Tuple[tuple, ...]

    @property
    def root_removed(self) -> bool:
        """O passo final removeu exatamente a linha raiz."""
        return bool(self.counts) and self.counts[-1][1] == 1


class ExecutionBudgetExceeded(Exception):
    pass


class RootNotRemoved(Exception):
    pass


class CascadeExecutor:
    """
    Executa os passos de um plano em uma única transação.
    Qualquer falha desfaz todos os passos já executados do plano.
    """

    def __init__(self, registry, store=None, budget_seconds=None, clock=None):
        self.registry = registry
        self.store = store or DeletionStore()
        self.budget_seconds = budget_seconds
        self.clock = clock or time.monotonic

    def remaining(self, started_at):
        """Segundos restantes do orçamento, ou None quando não há limite."""
        if not self.budget_seconds:
            return None
        return self.budget_seconds - (self.clock() - started_at)

    def execute(self, plan, started_at=None):
        """
        `started_at` é o instante (no relógio do executor) em que a exclusão
        começou; o planejamento feito antes conta no mesmo orçamento.
        """
        contagens = []
        total = len(plan.steps)
        posicao, passo = 0, None
        inicio = self.clock() if started_at is None else started_at

        try:
            self.store.begin()

            for posicao, passo in enumerate(plan.steps, start=1):
                restante = self.remaining(inicio)
                if restante is not None and restante <= 0:
                    raise ExecutionBudgetExceeded(
                        f"Tempo limite de {self.budget_seconds}s excedido antes do passo {posicao}."
                    )
                # Cada instrução só pode usar o que resta do orçamento
                self.store.apply_statement_timeout(restante)
                removidos = self.store.delete_where(passo.model, passo.column, passo.ids)
                contagens.append((passo.entity_type, removidos))

            # A raiz pode ter sido removida por outra requisição depois do planejamento
            if contagens[-1][1] != 1:
                raise RootNotRemoved(f"Esperava excluir 1 registro raiz, foram {contagens[-1][1]}.")

            self.store.commit()
        except Exception as e:
            self.store.rollback()
            descritor = self.registry.descriptor(passo.entity_type if passo else plan.root_type)
            current_app.logger.error(
                f"Erro ao excluir {plan.root_type.value} #{plan.root_id} no passo {posicao}/{total} "
                f"({descritor.display_name}): {e}"
            )
            motivo = "Tempo limite de execução excedido." if isinstance(e, ExecutionBudgetExceeded) else None
            raise TransactionError(
                passo.entity_type if passo else plan.root_type,
                posicao, total, descritor.display_name, reason=motivo,
            ) from e
        except BaseException:
            # Interrupções (ex.: KeyboardInterrupt) também não podem deixar cascata parcial
            self.store.rollback()
            raise

        return DeletionOutcome(counts=tuple(contagens))
