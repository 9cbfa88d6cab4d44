"""Pacote WSGI para o comando padrao da plataforma.

Render cria servicos Python com o comando
`gunicorn your_application:application`. Este pacote monta a API de
pedidos definida em `app.py` com a configuracao do ambiente e a expoe sob
o nome esperado (`application`).
"""

from app import create_app

application = create_app()

# Alias opcional para quem procurar `app`.
app = application
