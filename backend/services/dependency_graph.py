# backend/services/dependency_graph.py
"""Grafo de dependências do esquema escolar."""

from ..models.academico import AnoLectivo, Curso, Classe, Sala, Periodo, Disciplina, GradeCurricular
from ..models.aluno import Encarregado, Aluno, Matricula, Confirmacao, ServicoAluno
from ..models.docente import Especialidade, Docente, DisciplinaDocente
from ..models.financeiro import (
    Moeda, CategoriaServico, TipoServico, PropinaClasse, LimitePropina,
    MesClasse, FormaPagamento, Pagamento,
)
from ..models.turma import Turma, ServicoTurma, DiretorTurma, DocenteTurma
from ..models.utilizador import Utilizador
from .dependency_registry import (
    DependencyRegistry, DeletionPolicy, EntityDescriptor, EntityType as E, block, cascade,
)

CASCADE = DeletionPolicy.CASCADE
BLOCK = DeletionPolicy.BLOCK


def build_school_registry():
    return DependencyRegistry([
        # --- Exclusão em cascata ---
        EntityDescriptor(
            E.CLASS, Classe, 'Classe', 'classes', CASCADE, feminine=True,
            dependents=(
                cascade(E.SECTION, 'classe_id'),
                cascade(E.CURRICULUM, 'classe_id'),
                cascade(E.CLASS_TUITION, 'classe_id'),
                cascade(E.TUITION_LIMIT, 'classe_id'),
                cascade(E.CLASS_MONTH, 'classe_id'),
            ),
        ),
        EntityDescriptor(
            E.COURSE, Curso, 'Curso', 'courses', CASCADE,
            dependents=(
                cascade(E.SECTION, 'curso_id'),
                cascade(E.CURRICULUM, 'curso_id'),
                cascade(E.TEACHER_SUBJECT, 'curso_id'),
                cascade(E.ENROLLMENT, 'curso_id'),
                cascade(E.SUBJECT, 'curso_id'),
            ),
        ),
        EntityDescriptor(
            E.SECTION, Turma, 'Turma', 'sections', CASCADE, feminine=True,
            dependents=(
                cascade(E.CONFIRMATION, 'turma_id'),
                cascade(E.STUDENT_SERVICE, 'turma_id'),
                cascade(E.TEACHER_SECTION, 'turma_id'),
                cascade(E.SECTION_SERVICE, 'turma_id'),
                cascade(E.SECTION_DIRECTOR, 'turma_id'),
            ),
        ),
        EntityDescriptor(
            E.SUBJECT, Disciplina, 'Disciplina', 'subjects', CASCADE, feminine=True,
            dependents=(
                cascade(E.CURRICULUM, 'disciplina_id'),
                cascade(E.TEACHER_SUBJECT, 'disciplina_id'),
            ),
        ),
        # O aluno e o docente vinculados à conta levam junto matrículas, serviços e atribuições
        EntityDescriptor(
            E.LEGACY_USER, Utilizador, 'Utilizador', 'users', CASCADE, label_attr='nome',
            dependents=(
                cascade(E.STUDENT, 'utilizador_id'),
                cascade(E.TEACHER, 'utilizador_id'),
            ),
        ),
        EntityDescriptor(
            E.TEACHER, Docente, 'Docente', 'teachers', CASCADE, label_attr='nome',
            dependents=(
                cascade(E.TEACHER_SUBJECT, 'docente_id'),
                cascade(E.SECTION_DIRECTOR, 'docente_id'),
                cascade(E.TEACHER_SECTION, 'docente_id'),
            ),
        ),

        # --- Bloqueio ---
        EntityDescriptor(
            E.ACADEMIC_YEAR, AnoLectivo, 'Ano letivo', 'academicYears', BLOCK,
            dependents=(
                block(E.SECTION, 'ano_lectivo_id'),
                block(E.CONFIRMATION, 'ano_lectivo_id'),
                block(E.CLASS_TUITION, 'ano_lectivo_id'),
                block(E.SECTION_DIRECTOR, 'ano_lectivo_id'),
            ),
        ),
        EntityDescriptor(
            E.ROOM, Sala, 'Sala', 'rooms', BLOCK, feminine=True,
            dependents=(block(E.SECTION, 'sala_id'),),
        ),
        EntityDescriptor(
            E.PERIOD, Periodo, 'Período', 'periods', BLOCK,
            dependents=(block(E.SECTION, 'periodo_id'),),
        ),
        EntityDescriptor(
            E.CURRENCY, Moeda, 'Moeda', 'currencies', BLOCK, feminine=True,
            dependents=(block(E.SERVICE_TYPE, 'moeda_id'),),
        ),
        EntityDescriptor(
            E.SERVICE_CATEGORY, CategoriaServico, 'Categoria de serviço', 'serviceCategories', BLOCK,
            feminine=True,
            dependents=(block(E.SERVICE_TYPE, 'categoria_id'),),
        ),
        EntityDescriptor(
            E.PAYMENT_METHOD, FormaPagamento, 'Forma de pagamento', 'paymentMethods', BLOCK, feminine=True,
            dependents=(block(E.PAYMENT, 'forma_pagamento_id'),),
        ),
        EntityDescriptor(
            E.SPECIALTY, Especialidade, 'Especialidade', 'specialties', BLOCK, feminine=True,
            dependents=(block(E.TEACHER, 'especialidade_id'),),
        ),
        EntityDescriptor(
            E.GUARDIAN, Encarregado, 'Encarregado', 'guardians', BLOCK, label_attr='nome',
            dependents=(block(E.STUDENT, 'encarregado_id'),),
        ),
        EntityDescriptor(
            E.SERVICE_TYPE, TipoServico, 'Tipo de serviço', 'serviceTypes', BLOCK,
            dependents=(
                block(E.SECTION_SERVICE, 'tipo_servico_id'),
                block(E.STUDENT_SERVICE, 'tipo_servico_id'),
                block(E.CLASS_TUITION, 'tipo_servico_id'),
                block(E.PAYMENT, 'tipo_servico_id'),
            ),
        ),

        # Como raiz, aluno e matrícula recusam a exclusão; alcançados por uma
        # cascata (conta de utilizador, curso) seus dependentes vão junto.
        EntityDescriptor(
            E.STUDENT, Aluno, 'Aluno', 'students', BLOCK, label_attr='nome',
            dependents=(
                cascade(E.ENROLLMENT, 'aluno_id'),
                cascade(E.STUDENT_SERVICE, 'aluno_id'),
                cascade(E.PAYMENT, 'aluno_id'),
            ),
        ),
        EntityDescriptor(
            E.ENROLLMENT, Matricula, 'Matrícula', 'enrollments', BLOCK, label_attr=None, feminine=True,
            dependents=(cascade(E.CONFIRMATION, 'matricula_id'),),
        ),

        # --- Folhas ---
        EntityDescriptor(E.CONFIRMATION, Confirmacao, 'Confirmação', 'confirmations', BLOCK,
                         label_attr=None, feminine=True),
        EntityDescriptor(E.STUDENT_SERVICE, ServicoAluno, 'Serviço de aluno', 'studentServices', BLOCK,
                         label_attr=None),
        EntityDescriptor(E.TEACHER_SECTION, DocenteTurma, 'Docente da turma', 'teacherSections', BLOCK,
                         label_attr=None),
        EntityDescriptor(E.SECTION_SERVICE, ServicoTurma, 'Serviço de turma', 'sectionServices', BLOCK,
                         label_attr=None),
        EntityDescriptor(E.SECTION_DIRECTOR, DiretorTurma, 'Diretor de turma', 'sectionDirectors', BLOCK),
        EntityDescriptor(E.CURRICULUM, GradeCurricular, 'Grade curricular', 'curricula', BLOCK,
                         label_attr=None, feminine=True),
        EntityDescriptor(E.CLASS_TUITION, PropinaClasse, 'Propina da classe', 'classTuitions', BLOCK,
                         label_attr=None, feminine=True),
        EntityDescriptor(E.TUITION_LIMIT, LimitePropina, 'Limite de propina', 'tuitionLimits', BLOCK,
                         label_attr=None),
        EntityDescriptor(E.CLASS_MONTH, MesClasse, 'Mês da classe', 'classMonths', BLOCK, label_attr='mes'),
        EntityDescriptor(E.TEACHER_SUBJECT, DisciplinaDocente, 'Disciplina do docente', 'teacherSubjects',
                         BLOCK, label_attr=None, feminine=True),
        EntityDescriptor(E.PAYMENT, Pagamento, 'Pagamento', 'payments', BLOCK, label_attr=None),
    ])


REGISTRY = build_school_registry()
