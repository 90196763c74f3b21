# tests/conftest.py

import pytest
from backend.app import create_app
from backend.config import Config
from backend.models.database import db as _db
from backend.models.academico import AnoLectivo, Curso, Classe, Sala, Periodo, Disciplina, GradeCurricular
from backend.models.aluno import Encarregado, Aluno, Matricula, Confirmacao, ServicoAluno
from backend.models.docente import Especialidade, Docente, DisciplinaDocente
from backend.models.financeiro import (
    Moeda, CategoriaServico, TipoServico, PropinaClasse, LimitePropina,
    MesClasse, FormaPagamento, Pagamento,
)
from backend.models.turma import Turma, ServicoTurma, DiretorTurma, DocenteTurma
from backend.models.utilizador import Utilizador

class TestingConfig(Config):
    """Configuração dedicada para o ambiente de testes."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False
    DELETION_TIMEOUT_SECONDS = 30

    @staticmethod
    def init_app(app):
        pass

@pytest.fixture(scope='function')
def test_app():
    """Cria e configura uma instância da aplicação para cada teste."""
    app = create_app(config_class=TestingConfig)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()

@pytest.fixture(scope='function')
def db_session(test_app):
    """Fornece a sessão do banco de dados da aplicação."""
    with test_app.app_context():
        yield _db.session

@pytest.fixture(scope='function')
def test_client(test_app):
    """Cria um cliente de teste para simular requisições HTTP."""
    return test_app.test_client()

@pytest.fixture(scope='function')
def dados_escolares(db_session):
    """
    Base escolar usada pelos testes de exclusão.

    - Classe #5 com a Turma #12 (3 confirmações e demais vínculos) e a Turma #13 (vazia)
    - Classe #6 com a Turma #14 (1 confirmação), que nenhuma exclusão da classe #5 pode tocar
    - Utilizador #9 dono de um aluno com uma matrícula; Utilizador #10 com outro aluno
    - Moeda #2 usada por 4 tipos de serviço; Moeda #3 sem uso
    """
    # ETAPA A: tabelas sem dependências
    db_session.add_all([
        AnoLectivo(id=1, designacao='2025/2026'),
        Curso('Ciências Físicas e Biológicas', id=1),
        Curso('Ciências Económicas e Jurídicas', id=2),
        Classe('10ª Classe', id=5),
        Classe('11ª Classe', id=6),
        Sala(id=1, designacao='Sala 1'),
        Periodo(id=1, designacao='Manhã'),
        Moeda(id=2, designacao='Kwanza'),
        Moeda(id=3, designacao='Dólar'),
        CategoriaServico(id=1, designacao='Propinas'),
        FormaPagamento(id=1, designacao='Multicaixa'),
        Especialidade(id=1, designacao='Matemática'),
        Encarregado(id=1, nome='Maria Silva'),
        Utilizador('Ana Silva', 'ana.silva', id=9),
        Utilizador('Bruno Costa', 'bruno.costa', id=10),
        Utilizador('Carla Neto', 'carla.neto', id=11),
    ])
    db_session.commit()

    # ETAPA B: entidades que dependem da etapa A
    db_session.add_all([
        Turma('10A', classe_id=5, curso_id=1, id=12, sala_id=1, periodo_id=1, ano_lectivo_id=1),
        Turma('10B', classe_id=5, curso_id=1, id=13),
        Turma('11A', classe_id=6, curso_id=2, id=14, sala_id=1),
        Disciplina('Física', curso_id=1, id=1),
        Disciplina('Economia', curso_id=2, id=2),
        Docente('Pedro Manuel', id=1, especialidade_id=1),
        Docente('Rosa Lima', id=2, utilizador_id=10),
        Aluno('Ana Silva', id=1, utilizador_id=9, encarregado_id=1),
        Aluno('Bruno Costa', id=2, utilizador_id=10),
        Aluno('Carla Neto', id=3, utilizador_id=11),
        Aluno('Daniel Sousa', id=4),
    ])
    db_session.add_all([
        TipoServico(f'Propina {mes}', moeda_id=2, categoria_id=1, id=indice, preco=15000)
        for indice, mes in enumerate(['Janeiro', 'Fevereiro', 'Março', 'Abril'], start=1)
    ])
    db_session.commit()

    # ETAPA C: vínculos
    db_session.add_all([
        Matricula(1, 1, id=1),
        Matricula(2, 1, id=2),
        Matricula(3, 1, id=3),
        Matricula(4, 2, id=4),
        GradeCurricular(id=1, disciplina_id=1, classe_id=5, curso_id=1),
        GradeCurricular(id=2, disciplina_id=2, classe_id=6, curso_id=2),
        DisciplinaDocente(id=1, docente_id=1, curso_id=1, disciplina_id=1),
        DisciplinaDocente(id=2, docente_id=2, curso_id=2, disciplina_id=2),
        DocenteTurma(id=1, docente_id=1, turma_id=12),
        DocenteTurma(id=2, docente_id=2, turma_id=14),
        DiretorTurma(id=1, docente_id=1, turma_id=12, ano_lectivo_id=1),
        ServicoTurma(id=1, turma_id=12, tipo_servico_id=1),
        ServicoAluno(id=1, aluno_id=1, turma_id=12, tipo_servico_id=1),
        PropinaClasse(id=1, classe_id=5, tipo_servico_id=1, valor=15000),
        LimitePropina(id=1, classe_id=5, dia_limite=10),
        MesClasse(id=1, classe_id=5, mes='Setembro'),
        MesClasse(id=2, classe_id=5, mes='Outubro'),
        Pagamento(id=1, aluno_id=1, tipo_servico_id=1, forma_pagamento_id=1, valor=15000, mes='Setembro'),
    ])
    db_session.commit()

    db_session.add_all([
        Confirmacao(1, 12, id=1, ano_lectivo_id=1),
        Confirmacao(2, 12, id=2, ano_lectivo_id=1),
        Confirmacao(3, 12, id=3, ano_lectivo_id=1),
        Confirmacao(4, 14, id=4),
    ])
    db_session.commit()

    return {
        'classe_id': 5,
        'outra_classe_id': 6,
        'turmas': (12, 13),
        'outra_turma_id': 14,
        'utilizador_id': 9,
        'moeda_usada_id': 2,
        'moeda_livre_id': 3,
    }
