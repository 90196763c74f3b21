# backend/services/deletion_errors.py
"""
Erros do motor de exclusão.

- DeletionError: base dos resultados de negócio que a camada HTTP traduz em JSON
- NotFoundError: a raiz não existe (404)
- DependencyConflictError: entidade com política de bloqueio ainda possui dependentes (400)
- TransactionError: falha durante a execução da cascata; a transação foi desfeita (500)
- PlanningError: falha do banco ao consultar os dependentes, antes de qualquer exclusão (500)
- ConfigurationError: tipo de entidade sem registro no grafo (erro de programação)
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class DeletionError(Exception):
    """Base dos erros esperados de uma exclusão.

    Attributes:
        message: Mensagem exibível ao usuário
        status_code: Código HTTP sugerido para a resposta
        details: Contexto adicional (ex.: contagens por tipo)
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "detalhes": dict(self.details)}


class NotFoundError(DeletionError):
    status_code = 404

    def __init__(self, entity_type, entity_id: int, display_name: str) -> None:
        super().__init__(f"Registro de {display_name} #{entity_id} não encontrado.")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DependencyConflictError(DeletionError):
    """A exclusão foi recusada porque ainda existem dependentes.

    `conflicts` guarda apenas os tipos com contagem diferente de zero.
    """

    status_code = 400

    def __init__(self, entity_type, entity_id: int, display_name: str, conflicts: Dict[str, int],
                 label: Optional[str] = None) -> None:
        resumo = ", ".join(f"{chave}: {total}" for chave, total in conflicts.items())
        super().__init__(
            f"Não é possível excluir {display_name} #{entity_id} pois possui dependências ({resumo}).",
            details=conflicts,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.conflicts = dict(conflicts)
        self.label = label


class TransactionError(DeletionError):
    """Falha em um passo da cascata. Nada do plano foi aplicado.

    O erro original do banco fica em `__cause__` e vai para o log, nunca para a mensagem.
    """

    status_code = 500

    def __init__(self, failed_step, position: int, total_steps: int, display_name: str,
                 reason: Optional[str] = None) -> None:
        message = (f"Falha ao excluir registros de {display_name} (passo {position} de {total_steps}). "
                   "Nenhuma alteração foi aplicada.")
        if reason:
            message = f"{message} {reason}"
        super().__init__(
            message,
            details={"passo": position, "total_passos": total_steps, "entidade": failed_step.value},
        )
        self.failed_step = failed_step
        self.position = position
        self.total_steps = total_steps


class PlanningError(TransactionError):
    """Falha do banco durante o planejamento, antes de qualquer exclusão.

    `failed_step` é o tipo cujas linhas estavam sendo consultadas.
    """

    def __init__(self, entity_type, entity_id: int, display_name: str,
                 failed_step, step_display_name: str) -> None:
        DeletionError.__init__(
            self,
            f"Falha ao consultar os registros de {step_display_name} para excluir {display_name} "
            f"#{entity_id}. Nenhuma alteração foi aplicada.",
            details={"passo": 0, "total_passos": 0, "entidade": failed_step.value},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.failed_step = failed_step
        self.position = 0
        self.total_steps = 0


class ConfigurationError(RuntimeError):
    """Grafo de dependências inválido ou tipo não registrado."""
