# backend/app.py

import json
import logging

import click
from flask import Flask, jsonify
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from backend.config import Config
from backend.extensions import limiter
from backend.models.database import db

# --- Importações de TODOS os modelos para o Flask-Migrate ---
# É crucial que todos os modelos sejam importados aqui para que
# o Alembic/Flask-Migrate possa detectar as mudanças no schema.
from backend.models.academico import AnoLectivo, Curso, Classe, Sala, Periodo, Disciplina, GradeCurricular
from backend.models.aluno import Encarregado, Aluno, Matricula, Confirmacao, ServicoAluno
from backend.models.docente import Especialidade, Docente, DisciplinaDocente
from backend.models.financeiro import (
    Moeda, CategoriaServico, TipoServico, PropinaClasse, LimitePropina,
    MesClasse, FormaPagamento, Pagamento,
)
from backend.models.turma import Turma, ServicoTurma, DiretorTurma, DocenteTurma
from backend.models.utilizador import Utilizador
# ------------------------------------------------------------

def create_app(config_class=Config):
    """
    Fábrica de aplicação: cria e configura a instância do Flask.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    config_class.init_app(app)
    app.logger.setLevel(app.config.get('LOG_LEVEL', logging.INFO))

    db.init_app(app)
    Migrate(app, db)
    limiter.init_app(app)

    with app.app_context():
        register_blueprints(app)
        register_handlers(app)

    register_cli_commands(app)
    return app

def register_blueprints(app):
    """Importa e registra os blueprints na aplicação."""
    # Importações locais para evitar dependência circular
    from backend.controllers.exclusao_controller import exclusao_bp

    app.register_blueprint(exclusao_bp)

def register_handlers(app):
    @app.after_request
    def add_header(response):
        # Respostas de exclusão nunca devem ser reaproveitadas de cache
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({"message": error.description, "detalhes": {}}), error.code

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback() # Garante rollback em caso de erro no banco
        return jsonify({"message": "Erro interno do servidor.", "detalhes": {}}), 500

def register_cli_commands(app):
    @app.cli.command("excluir-entidade")
    @click.argument("tipo")
    @click.argument("entity_id", type=int)
    @click.option('--dry-run', is_flag=True, help='Apenas mostra o que seria excluído.')
    @click.option('--yes', 'confirmado', is_flag=True, help='Não pede confirmação.')
    def excluir_entidade_command(tipo, entity_id, dry_run, confirmado):
        """Exclui uma entidade e, conforme o grafo, os seus dependentes."""
        from backend.services.deletion_errors import DeletionError
        from backend.services.deletion_service import DeletionService
        from backend.services.dependency_registry import EntityType

        try:
            entity_type = EntityType(tipo)
        except ValueError:
            raise click.BadParameter(
                f"use um de: {', '.join(t.value for t in EntityType)}", param_hint="TIPO"
            )

        try:
            previa = DeletionService.preview_entity(entity_type, entity_id)
            click.echo(json.dumps(previa, ensure_ascii=False, indent=2))
            if dry_run:
                return
            if not previa["pode_excluir"]:
                raise click.ClickException(previa["message"])
            if not confirmado and not click.confirm("ATENÇÃO: esta exclusão é definitiva. Deseja continuar?"):
                click.echo("Operação cancelada.")
                return

            relatorio = DeletionService.delete_entity(entity_type, entity_id)
        except DeletionError as e:
            raise click.ClickException(e.message)

        click.echo(json.dumps(relatorio.to_dict(), ensure_ascii=False, indent=2))

if __name__ == '__main__':
    app = create_app()
    app.run(debug=True)
