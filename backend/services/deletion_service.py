# backend/services/deletion_service.py

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from .cascade_executor import CascadeExecutor
from .cascade_planner import CascadePlanner, DeletionPlan, DeletionStep
from .deletion_errors import (
    DeletionError, DependencyConflictError, NotFoundError, PlanningError, TransactionError,
)
from .deletion_guard import DeletionGuard
from .deletion_report import CASCADE_DELETE, HARD_DELETE, DeletionReportBuilder
from .deletion_store import DeletionStore
from .dependency_graph import REGISTRY
from .dependency_registry import DeletionPolicy


class DeletionService:
    """
    Ponto de entrada do motor de exclusão para controllers e comandos.

    - Política BLOCK: verifica os dependentes diretos; sem dependentes, exclui só a linha
    - Política CASCADE: planeja, executa em uma transação e devolve as contagens
    """

    @staticmethod
    def _budget():
        return current_app.config.get('DELETION_TIMEOUT_SECONDS', 30)

    @staticmethod
    def delete_entity(entity_type, entity_id, registry=None):
        registry = registry or REGISTRY
        store = DeletionStore()
        raiz = registry.descriptor(entity_type)
        relatorios = DeletionReportBuilder(registry)
        executor = CascadeExecutor(registry, store, budget_seconds=DeletionService._budget())
        # O orçamento de tempo cobre o planejamento e a execução
        inicio = executor.clock()

        try:
            if raiz.policy is DeletionPolicy.BLOCK:
                plano = DeletionService._plan_single_row(registry, store, entity_type, entity_id)
            else:
                plano = CascadePlanner(registry, store).plan(entity_type, entity_id)
        except DeletionError as e:
            # Encerra a transação de leitura aberta pelas consultas do planejamento
            store.rollback()
            if isinstance(e, TransactionError):
                current_app.logger.error(
                    f"Erro ao planejar a exclusão de {entity_type.value} #{entity_id}: {e.__cause__}"
                )
            else:
                current_app.logger.warning(f"Exclusão de {entity_type.value} #{entity_id} recusada: {e.message}")
            raise

        resultado = executor.execute(plano, started_at=inicio)

        if raiz.policy is DeletionPolicy.BLOCK:
            relatorio = relatorios.build_hard_delete(entity_type, entity_id, plano.root_label)
        else:
            relatorio = relatorios.build_cascade(plano, resultado)

        current_app.logger.info(
            f"{raiz.display_name} #{entity_id} {raiz.inflect('excluído', 'excluída')} ({relatorio.tipo}): {dict(relatorio.detalhes)}"
        )
        return relatorio

    @staticmethod
    def _check_single_row(registry, store, entity_type, entity_id):
        """Existência e dependentes diretos de uma raiz com política de bloqueio."""
        raiz = registry.descriptor(entity_type)
        try:
            linha = store.find_by_id(raiz.model, entity_id)
            if linha is None:
                raise NotFoundError(entity_type, entity_id, raiz.display_name)
            verificacao = DeletionGuard(registry, store).check_blocking(entity_type, entity_id)
        except SQLAlchemyError as e:
            raise PlanningError(entity_type, entity_id, raiz.display_name, entity_type, raiz.display_name) from e
        return raiz.label_of(linha), verificacao

    @staticmethod
    def _plan_single_row(registry, store, entity_type, entity_id):
        raiz = registry.descriptor(entity_type)
        rotulo, verificacao = DeletionService._check_single_row(registry, store, entity_type, entity_id)
        if not verificacao.deletable:
            raise DependencyConflictError(
                entity_type, entity_id, raiz.display_name, verificacao.nonzero, label=rotulo,
            )

        passo = DeletionStep(entity_type, raiz.model, 'id', (entity_id,))
        return DeletionPlan(entity_type, entity_id, rotulo, (passo,))

    @staticmethod
    def preview_entity(entity_type, entity_id, registry=None):
        """Mostra o que seria excluído, sem excluir nada."""
        registry = registry or REGISTRY
        store = DeletionStore()
        raiz = registry.descriptor(entity_type)

        try:
            if raiz.policy is DeletionPolicy.BLOCK:
                rotulo, verificacao = DeletionService._check_single_row(registry, store, entity_type, entity_id)
                if verificacao.deletable:
                    message = f'{raiz.display_name} "{rotulo}" não possui dependentes e pode ser excluíd{raiz.inflect("o", "a")}.'
                else:
                    message = f'{raiz.display_name} "{rotulo}" possui dependências e não pode ser excluíd{raiz.inflect("o", "a")}.'
                return {
                    "message": message,
                    "tipo": HARD_DELETE,
                    "detalhes": verificacao.conflicts,
                    "entidade": {"tipo": entity_type.value, "id": entity_id, "nome": rotulo},
                    "pode_excluir": verificacao.deletable,
                }

            try:
                plano = CascadePlanner(registry, store).plan(entity_type, entity_id)
            except DependencyConflictError as e:
                return {
                    "message": e.message,
                    "tipo": CASCADE_DELETE,
                    "detalhes": e.conflicts,
                    "entidade": {"tipo": entity_type.value, "id": entity_id, "nome": e.label},
                    "pode_excluir": False,
                }

            # Um tipo pode ser alcançado por mais de um caminho: conta linhas distintas
            ids_por_tipo = {}
            try:
                for passo in plano.dependent_steps:
                    encontrados = store.select_ids_where(passo.model, passo.column, passo.ids)
                    ids_por_tipo.setdefault(passo.entity_type, set()).update(encontrados)
            except SQLAlchemyError as e:
                descritor = registry.descriptor(passo.entity_type)
                raise PlanningError(
                    entity_type, entity_id, raiz.display_name, passo.entity_type, descritor.display_name,
                ) from e

            relatorio = DeletionReportBuilder(registry).build_preview(
                plano, {tipo: len(ids) for tipo, ids in ids_por_tipo.items()}
            )
            resposta = relatorio.to_dict()
            resposta["pode_excluir"] = True
            return resposta
        finally:
            store.rollback()
