# backend/models/__init__.py

from .database import db

from .utilizador import Utilizador
from .academico import AnoLectivo, Curso, Classe, Sala, Periodo, Disciplina, GradeCurricular
from .docente import Especialidade, Docente, DisciplinaDocente
from .turma import Turma, ServicoTurma, DiretorTurma, DocenteTurma
from .financeiro import (
    Moeda, CategoriaServico, TipoServico, PropinaClasse, LimitePropina,
    MesClasse, FormaPagamento, Pagamento,
)
from .aluno import Encarregado, Aluno, Matricula, Confirmacao, ServicoAluno


__all__ = [
    'db',
    'Utilizador',
    'AnoLectivo',
    'Curso',
    'Classe',
    'Sala',
    'Periodo',
    'Disciplina',
    'GradeCurricular',
    'Especialidade',
    'Docente',
    'DisciplinaDocente',
    'Turma',
    'ServicoTurma',
    'DiretorTurma',
    'DocenteTurma',
    'Moeda',
    'CategoriaServico',
    'TipoServico',
    'PropinaClasse',
    'LimitePropina',
    'MesClasse',
    'FormaPagamento',
    'Pagamento',
    'Encarregado',
    'Aluno',
    'Matricula',
    'Confirmacao',
    'ServicoAluno',
]
