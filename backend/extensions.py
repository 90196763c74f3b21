# backend/extensions.py

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# O limite padrão vem de RATELIMIT_DEFAULT na configuração
limiter = Limiter(key_func=get_remote_address)
