# backend/controllers/exclusao_controller.py

from flask import Blueprint, abort, current_app, jsonify

from ..extensions import limiter
from ..services.deletion_errors import DeletionError
from ..services.deletion_service import DeletionService
from ..services.dependency_graph import REGISTRY
from ..services.dependency_registry import DeletionPolicy, EntityType

exclusao_bp = Blueprint('exclusao', __name__, url_prefix='/api/exclusao')


def _resolver_tipo(tipo):
    try:
        return EntityType(tipo)
    except ValueError:
        abort(404, description=f"Tipo de entidade desconhecido: '{tipo}'.")


@exclusao_bp.errorhandler(DeletionError)
def tratar_erro_exclusao(erro):
    return jsonify(erro.to_dict()), erro.status_code


@exclusao_bp.route('/<string:tipo>/<int:entity_id>', methods=['DELETE'])
@limiter.limit(lambda: current_app.config.get('RATELIMIT_DELETE', "30 per minute"))
def excluir_entidade(tipo, entity_id):
    entity_type = _resolver_tipo(tipo)
    relatorio = DeletionService.delete_entity(entity_type, entity_id)
    return jsonify(relatorio.to_dict()), 200


@exclusao_bp.route('/<string:tipo>/<int:entity_id>/previa', methods=['GET'])
def previa_exclusao(tipo, entity_id):
    entity_type = _resolver_tipo(tipo)
    return jsonify(DeletionService.preview_entity(entity_type, entity_id)), 200


@exclusao_bp.route('/<string:tipo>/dependencias', methods=['GET'])
def listar_dependencias(tipo):
    """Arestas declaradas para o tipo, na ordem em que a exclusão as percorre."""
    entity_type = _resolver_tipo(tipo)
    descritor = REGISTRY.descriptor(entity_type)

    if descritor.policy is DeletionPolicy.CASCADE:
        ligacoes = [(ligacao.edge, ligacao.depth) for ligacao in REGISTRY.cascade_edges(entity_type)]
    else:
        ligacoes = [(aresta, 1) for aresta in REGISTRY.direct_edges(entity_type)]

    return jsonify({
        "tipo": entity_type.value,
        "nome": descritor.display_name,
        "politica": descritor.policy.value,
        "dependencias": [
            {
                "pai": aresta.parent.value,
                "filho": aresta.child.value,
                "chave": aresta.foreign_key,
                "politica": aresta.policy.value,
                "profundidade": profundidade,
            }
            for aresta, profundidade in ligacoes
        ],
    }), 200
