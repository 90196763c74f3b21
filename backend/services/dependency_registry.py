# backend/services/dependency_registry.py
"""
Registro do grafo de dependências entre entidades.

Cada tipo de entidade declara, em ordem, os tipos que dependem dele (tabela
filha + chave estrangeira + política). O registro é montado uma única vez e
depois só é lido:

- `descriptor(tipo)` devolve a descrição do tipo
- `direct_edges(tipo)` devolve as arestas diretas (usadas na checagem de bloqueio)
- `cascade_edges(tipo)` devolve as arestas transitivas já na ordem de exclusão,
  das folhas para a raiz

Ciclos, tipos não registrados e chaves estrangeiras inexistentes são erros de
configuração e falham na construção.
"""

from __future__ import annotations

import typing as t
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from .deletion_errors import ConfigurationError


class EntityType(str, Enum):
    # Raízes com exclusão em cascata
    CLASS = "class"
    COURSE = "course"
    SECTION = "section"
    SUBJECT = "subject"
    LEGACY_USER = "legacy_user"
    TEACHER = "teacher"

    # Raízes que recusam a exclusão quando há dependentes
    ACADEMIC_YEAR = "academic_year"
    ROOM = "room"
    PERIOD = "period"
    CURRENCY = "currency"
    SERVICE_CATEGORY = "service_category"
    PAYMENT_METHOD = "payment_method"
    SPECIALTY = "specialty"
    GUARDIAN = "guardian"
    STUDENT = "student"
    ENROLLMENT = "enrollment"
    SERVICE_TYPE = "service_type"

    # Dependentes
    CONFIRMATION = "confirmation"
    STUDENT_SERVICE = "student_service"
    TEACHER_SECTION = "teacher_section"
    SECTION_SERVICE = "section_service"
    SECTION_DIRECTOR = "section_director"
    CURRICULUM = "curriculum"
    CLASS_TUITION = "class_tuition"
    TUITION_LIMIT = "tuition_limit"
    CLASS_MONTH = "class_month"
    TEACHER_SUBJECT = "teacher_subject"
    PAYMENT = "payment"


class DeletionPolicy(str, Enum):
    CASCADE = "cascade"
    BLOCK = "block"


@dataclass(frozen=True)
class Dependent:
    """Declaração de um dependente, do ponto de vista do pai."""
    child: EntityType
    foreign_key: str
    policy: DeletionPolicy = DeletionPolicy.CASCADE


def cascade(child: EntityType, foreign_key: str) -> Dependent:
    return Dependent(child, foreign_key, DeletionPolicy.CASCADE)


def block(child: EntityType, foreign_key: str) -> Dependent:
    return Dependent(child, foreign_key, DeletionPolicy.BLOCK)


@dataclass(frozen=True)
class DependencyEdge:
    parent: EntityType
    child: EntityType
    foreign_key: str
    policy: DeletionPolicy


@dataclass(frozen=True)
class CascadeEdge:
    """Aresta alcançada a partir de uma raiz. `via` é a aresta que leva ao pai (None se o pai é a raiz)."""
    edge: DependencyEdge
    via: t.Optional["CascadeEdge"] = None

    @property
    def depth(self) -> int:
        return 1 if self.via is None else self.via.depth + 1


@dataclass(frozen=True)
class EntityDescriptor:
    entity_type: EntityType
    model: t.Any
    display_name: str
    report_key: str
    policy: DeletionPolicy
    dependents: t.Tuple[Dependent, ...] = ()
    label_attr: t.Optional[str] = 'designacao'
    feminine: bool = False

    def label_of(self, row) -> str:
        valor = getattr(row, self.label_attr, None) if self.label_attr else None
        return str(valor) if valor else f"#{row.id}"

    def inflect(self, masculine: str, feminine: str) -> str:
        return feminine if self.feminine else masculine


class DependencyRegistry:

    def __init__(self, descriptors: t.Iterable[EntityDescriptor]):
        por_tipo = {}
        for descritor in descriptors:
            if descritor.entity_type in por_tipo:
                raise ConfigurationError(f"Tipo '{descritor.entity_type.value}' registrado mais de uma vez.")
            por_tipo[descritor.entity_type] = descritor
        self._descriptors = MappingProxyType(por_tipo)

        self._edges = MappingProxyType({
            tipo: tuple(
                DependencyEdge(tipo, dep.child, dep.foreign_key, dep.policy)
                for dep in descritor.dependents
            )
            for tipo, descritor in por_tipo.items()
        })

        self._validate_edges()
        self._check_acyclic()

        self._cascade_edges = MappingProxyType({
            tipo: tuple(self._flatten(tipo, None)) for tipo in por_tipo
        })

    def __contains__(self, entity_type) -> bool:
        return entity_type in self._descriptors

    def __iter__(self):
        return iter(self._descriptors.values())

    def descriptor(self, entity_type: EntityType) -> EntityDescriptor:
        try:
            return self._descriptors[entity_type]
        except KeyError:
            nome = getattr(entity_type, 'value', entity_type)
            raise ConfigurationError(f"Tipo de entidade '{nome}' não está registrado no grafo de dependências.") from None

    def direct_edges(self, entity_type: EntityType) -> t.Tuple[DependencyEdge, ...]:
        self.descriptor(entity_type)
        return self._edges[entity_type]

    def cascade_edges(self, entity_type: EntityType) -> t.Tuple[CascadeEdge, ...]:
        """Arestas transitivas da raiz, das folhas para a raiz (pós-ordem)."""
        self.descriptor(entity_type)
        return self._cascade_edges[entity_type]

    # --- Construção ---

    def _validate_edges(self):
        for tipo, arestas in self._edges.items():
            for aresta in arestas:
                if aresta.child not in self._descriptors:
                    raise ConfigurationError(
                        f"'{tipo.value}' declara o dependente '{aresta.child.value}', que não está registrado."
                    )
                modelo = self._descriptors[aresta.child].model
                if not hasattr(modelo, aresta.foreign_key):
                    raise ConfigurationError(
                        f"{modelo.__name__} não possui a coluna '{aresta.foreign_key}' "
                        f"(dependência de '{tipo.value}')."
                    )

    def _check_acyclic(self):
        visitando, concluidos = [], set()

        def visitar(tipo):
            if tipo in concluidos:
                return
            if tipo in visitando:
                ciclo = visitando[visitando.index(tipo):] + [tipo]
                raise ConfigurationError(
                    "Ciclo no grafo de dependências: " + " -> ".join(t_.value for t_ in ciclo)
                )
            visitando.append(tipo)
            for aresta in self._edges[tipo]:
                visitar(aresta.child)
            visitando.pop()
            concluidos.add(tipo)

        for tipo in self._descriptors:
            visitar(tipo)

    def _flatten(self, entity_type, via):
        ordenadas = []
        for aresta in self._edges[entity_type]:
            atual = CascadeEdge(aresta, via)
            # Arestas de bloqueio não descem: o planejador só conta as linhas delas
            if aresta.policy is DeletionPolicy.CASCADE:
                ordenadas.extend(self._flatten(aresta.child, atual))
            ordenadas.append(atual)
        return ordenadas
