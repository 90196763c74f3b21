# backend/config.py

import os
basedir = os.path.abspath(os.path.dirname(__file__))

# Este bloco carrega o arquivo .env, tornando as variáveis disponíveis para 'os.environ.get'
from dotenv import load_dotenv
dotenv_path = os.path.join(os.path.dirname(basedir), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)

class Config:
    # --- BANCO DE DADOS ---
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL")

    SQLALCHEMY_ECHO = False

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # --- EXCLUSÃO EM CASCATA ---
    # Tempo máximo de uma transação de exclusão, em segundos (0 desativa)
    DELETION_TIMEOUT_SECONDS = float(os.environ.get('DELETION_TIMEOUT_SECONDS', 30))

    # --- LIMITES DE REQUISIÇÃO (Flask-Limiter) ---
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', "200 per minute")
    RATELIMIT_DELETE = os.environ.get('RATELIMIT_DELETE', "30 per minute")
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', "memory://")

    # --- LOGS ---
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # --- INICIALIZAÇÃO DO APP ---
    @staticmethod
    def init_app(app):
        if not app.config.get("SQLALCHEMY_DATABASE_URI"):
            raise ValueError(
                "A variável de ambiente 'DATABASE_URL' não foi carregada. "
                "Verifique o arquivo .env e o arquivo de configuração WSGI."
            )
        if app.config.get("DELETION_TIMEOUT_SECONDS", 0) < 0:
            raise ValueError("DELETION_TIMEOUT_SECONDS não pode ser negativo.")
