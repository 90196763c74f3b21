# tests/test_deletion_service.py

import logging
import time
from unittest.mock import patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from backend.models.database import db
from backend.models.academico import Classe, Curso, Disciplina, GradeCurricular
from backend.models.aluno import Aluno, Confirmacao, Matricula, ServicoAluno
from backend.models.financeiro import LimitePropina, MesClasse, Moeda, Pagamento, PropinaClasse, TipoServico
from backend.models.turma import DiretorTurma, DocenteTurma, ServicoTurma, Turma
from backend.models.utilizador import Utilizador
from backend.services.cascade_planner import CascadePlanner
from backend.services.deletion_errors import (
    DependencyConflictError, NotFoundError, PlanningError, TransactionError,
)
from backend.services.deletion_report import CASCADE_DELETE, HARD_DELETE
from backend.services.deletion_service import DeletionService
from backend.services.deletion_store import DeletionStore
from backend.services.dependency_registry import (
    DeletionPolicy, DependencyRegistry, EntityDescriptor, EntityType as E, block, cascade,
)

DETALHES_DA_CLASSE_5 = {
    'confirmations': 3,
    'studentServices': 1,
    'teacherSections': 1,
    'sectionServices': 1,
    'sectionDirectors': 1,
    'sections': 2,
    'curricula': 1,
    'classTuitions': 1,
    'tuitionLimits': 1,
    'classMonths': 2,
}


def _contar(db_session, model, *condicoes):
    return db_session.scalar(select(db.func.count(model.id)).where(*condicoes))


class TestExclusaoEmCascata:
    """
    Suíte de testes para a exclusão de raízes com política de cascata.
    """

    def test_exclui_classe_e_dependentes(self, db_session, dados_escolares):
        # Ação
        relatorio = DeletionService.delete_entity(E.CLASS, 5)

        # Asserções
        assert relatorio.tipo == CASCADE_DELETE
        assert dict(relatorio.detalhes) == DETALHES_DA_CLASSE_5
        assert relatorio.to_dict()['entidade'] == {'tipo': 'class', 'id': 5, 'nome': '10ª Classe'}
        assert db_session.get(Classe, 5) is None
        assert db_session.get(Turma, 12) is None
        assert db_session.get(Turma, 13) is None

    def test_nenhum_dependente_sobrevive(self, db_session, dados_escolares):
        DeletionService.delete_entity(E.CLASS, 5)
        turmas = dados_escolares['turmas']

        assert _contar(db_session, Turma, Turma.classe_id == 5) == 0
        assert _contar(db_session, Confirmacao, Confirmacao.turma_id.in_(turmas)) == 0
        assert _contar(db_session, ServicoAluno, ServicoAluno.turma_id.in_(turmas)) == 0
        assert _contar(db_session, DocenteTurma, DocenteTurma.turma_id.in_(turmas)) == 0
        assert _contar(db_session, ServicoTurma, ServicoTurma.turma_id.in_(turmas)) == 0
        assert _contar(db_session, DiretorTurma, DiretorTurma.turma_id.in_(turmas)) == 0
        assert _contar(db_session, GradeCurricular, GradeCurricular.classe_id == 5) == 0
        assert _contar(db_session, PropinaClasse, PropinaClasse.classe_id == 5) == 0
        assert _contar(db_session, LimitePropina, LimitePropina.classe_id == 5) == 0
        assert _contar(db_session, MesClasse, MesClasse.classe_id == 5) == 0

    def test_outra_classe_nao_e_afetada(self, db_session, dados_escolares):
        DeletionService.delete_entity(E.CLASS, 5)

        assert db_session.get(Classe, 6) is not None
        assert db_session.get(Turma, 14) is not None
        assert db_session.get(Confirmacao, 4) is not None
        assert db_session.get(DocenteTurma, 2) is not None
        assert db_session.get(GradeCurricular, 2) is not None
        # Matrículas e alunos ficam: só as confirmações da classe são removidas
        assert _contar(db_session, Matricula) == 4
        assert _contar(db_session, Aluno) == 4

    def test_filhos_excluidos_antes_dos_pais(self, db_session, dados_escolares):
        original = DeletionStore.delete_where
        ordem = []

        def registrar(self, model, column, ids):
            ordem.append(model)
            return original(self, model, column, ids)

        with patch.object(DeletionStore, 'delete_where', autospec=True, side_effect=registrar):
            DeletionService.delete_entity(E.CLASS, 5)

        assert ordem.index(Confirmacao) < ordem.index(Turma) < ordem.index(Classe)
        assert ordem[-1] is Classe

    def test_exclui_conta_de_utilizador(self, db_session, dados_escolares):
        """
        A conta #9 tem um aluno com uma matrícula; as contagens do relatório
        batem com as contagens consultadas antes da exclusão.
        """
        aluno = db_session.scalar(select(Aluno).where(Aluno.utilizador_id == 9))
        esperado = {
            'students': 1,
            'enrollments': _contar(db_session, Matricula, Matricula.aluno_id == aluno.id),
            'confirmations': _contar(
                db_session, Confirmacao,
                Confirmacao.matricula_id.in_(select(Matricula.id).where(Matricula.aluno_id == aluno.id)),
            ),
            'studentServices': _contar(db_session, ServicoAluno, ServicoAluno.aluno_id == aluno.id),
            'payments': _contar(db_session, Pagamento, Pagamento.aluno_id == aluno.id),
            'teachers': 0,
            'teacherSubjects': 0,
            'sectionDirectors': 0,
            'teacherSections': 0,
        }

        relatorio = DeletionService.delete_entity(E.LEGACY_USER, 9)

        assert dict(relatorio.detalhes) == esperado
        assert esperado['enrollments'] == 1
        assert db_session.get(Utilizador, 9) is None
        assert db_session.get(Aluno, 1) is None
        assert db_session.get(Matricula, 1) is None
        assert db_session.get(Aluno, 2) is not None

    def test_exclui_curso(self, db_session, dados_escolares):
        relatorio = DeletionService.delete_entity(E.COURSE, 1)

        assert relatorio.detalhes['sections'] == 2
        assert relatorio.detalhes['enrollments'] == 3
        assert relatorio.detalhes['subjects'] == 1
        assert relatorio.detalhes['confirmations'] == 3
        assert db_session.get(Curso, 1) is None
        assert db_session.get(Disciplina, 1) is None
        assert db_session.get(Curso, 2) is not None
        assert db_session.get(Matricula, 4) is not None

    def test_raiz_inexistente(self, db_session, dados_escolares):
        with pytest.raises(NotFoundError):
            DeletionService.delete_entity(E.CLASS, 999)


class TestExclusaoComBloqueio:
    """
    Suíte de testes para raízes que recusam a exclusão quando há dependentes.
    """

    def test_moeda_em_uso_e_recusada(self, db_session, dados_escolares, caplog):
        caplog.set_level(logging.WARNING)

        with pytest.raises(DependencyConflictError) as excinfo:
            DeletionService.delete_entity(E.CURRENCY, 2)

        assert excinfo.value.status_code == 400
        assert excinfo.value.to_dict()['detalhes'] == {'serviceTypes': 4}
        assert "recusada" in caplog.text
        assert db_session.get(Moeda, 2) is not None
        assert _contar(db_session, TipoServico) == 4

    def test_conflito_so_traz_contagens_nao_zeradas(self, db_session, dados_escolares):
        with pytest.raises(DependencyConflictError) as excinfo:
            DeletionService.delete_entity(E.ACADEMIC_YEAR, 1)

        assert excinfo.value.conflicts == {'sections': 1, 'confirmations': 3, 'sectionDirectors': 1}

    def test_moeda_sem_uso_e_excluida(self, db_session, dados_escolares):
        relatorio = DeletionService.delete_entity(E.CURRENCY, 3)

        assert relatorio.tipo == HARD_DELETE
        assert dict(relatorio.detalhes) == {}
        assert relatorio.message == 'Moeda "Dólar" excluída com sucesso!'
        assert db_session.get(Moeda, 3) is None
        assert db_session.get(Moeda, 2) is not None

    def test_aluno_matriculado_e_recusado_como_raiz(self, db_session, dados_escolares):
        with pytest.raises(DependencyConflictError) as excinfo:
            DeletionService.delete_entity(E.STUDENT, 4)

        assert excinfo.value.conflicts == {'enrollments': 1}
        assert db_session.get(Aluno, 4) is not None

    def test_raiz_inexistente(self, db_session, dados_escolares):
        with pytest.raises(NotFoundError) as excinfo:
            DeletionService.delete_entity(E.CURRENCY, 999)

        assert excinfo.value.status_code == 404


class TestPrevia:
    """
    A prévia mostra o que seria excluído sem alterar o banco.
    """

    def test_previa_da_classe(self, db_session, dados_escolares):
        previa = DeletionService.preview_entity(E.CLASS, 5)

        assert previa['pode_excluir'] is True
        assert previa['tipo'] == CASCADE_DELETE
        assert previa['detalhes'] == DETALHES_DA_CLASSE_5
        assert db_session.get(Classe, 5) is not None
        assert _contar(db_session, Confirmacao) == 4

    def test_previa_da_moeda_em_uso(self, db_session, dados_escolares):
        previa = DeletionService.preview_entity(E.CURRENCY, 2)

        assert previa['pode_excluir'] is False
        assert previa['tipo'] == HARD_DELETE
        assert previa['detalhes'] == {'serviceTypes': 4}
        assert previa['entidade'] == {'tipo': 'currency', 'id': 2, 'nome': 'Kwanza'}

    def test_previa_conta_linhas_distintas(self, db_session, dados_escolares):
        """
        No curso #1 as confirmações são alcançadas pela turma e pela matrícula;
        a prévia conta cada confirmação uma única vez.
        """
        previa = DeletionService.preview_entity(E.COURSE, 1)

        assert previa['detalhes']['confirmations'] == 3
        assert previa['detalhes']['curricula'] == 1

    def test_previa_de_raiz_inexistente(self, db_session, dados_escolares):
        with pytest.raises(NotFoundError):
            DeletionService.preview_entity(E.CLASS, 999)


class TestFalhasNoPlanejamento:
    """
    Erros do banco durante as consultas do planejamento viram TransactionError,
    com a transação de leitura desfeita e sem o texto do driver na mensagem.
    """

    def test_falha_ao_resolver_dependentes_da_cascata(self, db_session, dados_escolares, caplog):
        caplog.set_level(logging.ERROR)
        erro = SQLAlchemyError("driver: relation tb_x does not exist")

        with patch.object(DeletionStore, 'select_ids_where', autospec=True, side_effect=erro):
            with pytest.raises(TransactionError) as excinfo:
                DeletionService.delete_entity(E.CLASS, 5)

        falha = excinfo.value
        assert isinstance(falha, PlanningError)
        assert falha.status_code == 500
        assert falha.failed_step is E.CONFIRMATION
        assert falha.__cause__ is erro
        assert 'tb_x' not in falha.message
        assert 'Nenhuma alteração foi aplicada' in falha.message
        assert 'tb_x' in caplog.text
        assert db_session().in_transaction() is False
        assert db_session.get(Classe, 5) is not None

    def test_falha_ao_contar_dependentes_do_bloqueio(self, db_session, dados_escolares):
        erro = SQLAlchemyError("driver: relation tipos_servico does not exist")

        with patch.object(DeletionStore, 'count_where', autospec=True, side_effect=erro):
            with pytest.raises(PlanningError) as excinfo:
                DeletionService.delete_entity(E.CURRENCY, 3)

        assert excinfo.value.failed_step is E.CURRENCY
        assert db_session().in_transaction() is False
        assert db_session.get(Moeda, 3) is not None

    def test_falha_na_previa(self, db_session, dados_escolares):
        erro = SQLAlchemyError("driver: relation tb_x does not exist")

        with patch.object(DeletionStore, 'select_ids_where', autospec=True, side_effect=erro):
            with pytest.raises(PlanningError):
                DeletionService.preview_entity(E.CLASS, 5)

        assert db_session().in_transaction() is False


class TestOrcamentoDeTempo:

    def test_planejamento_lento_consome_o_orcamento(self, test_app, db_session, dados_escolares):
        """
        O orçamento começa a contar antes do planejamento: um planejamento
        mais lento que o orçamento impede qualquer exclusão.
        """
        test_app.config['DELETION_TIMEOUT_SECONDS'] = 0.05
        planejar = CascadePlanner.plan

        def planejar_devagar(self, root_type, root_id):
            plano = planejar(self, root_type, root_id)
            time.sleep(0.1)
            return plano

        with patch.object(CascadePlanner, 'plan', autospec=True, side_effect=planejar_devagar):
            with pytest.raises(TransactionError) as excinfo:
                DeletionService.delete_entity(E.CLASS, 5)

        assert excinfo.value.position == 1
        assert 'Tempo limite' in excinfo.value.message
        assert db_session.get(Classe, 5) is not None


class TestPreviaComConflito:

    def test_conflito_na_cascata_traz_o_nome_da_raiz(self, db_session, dados_escolares):
        registro = DependencyRegistry([
            EntityDescriptor(E.CLASS, Classe, 'Classe', 'classes', DeletionPolicy.CASCADE, feminine=True,
                             dependents=(cascade(E.SECTION, 'classe_id'),)),
            EntityDescriptor(E.SECTION, Turma, 'Turma', 'sections', DeletionPolicy.CASCADE,
                             dependents=(block(E.CONFIRMATION, 'turma_id'),)),
            EntityDescriptor(E.CONFIRMATION, Confirmacao, 'Confirmação', 'confirmations',
                             DeletionPolicy.BLOCK, label_attr=None),
        ])

        previa = DeletionService.preview_entity(E.CLASS, 5, registry=registro)

        assert previa['pode_excluir'] is False
        assert previa['detalhes'] == {'confirmations': 3}
        assert previa['entidade'] == {'tipo': 'class', 'id': 5, 'nome': '10ª Classe'}
