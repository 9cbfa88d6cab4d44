# Sistema de Pedidos - API REST
import logging

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import CORS_HEADERS, CORS_METHODS, load_config
from errors import PedidoError, ValidationError
from models import db
from repository import PedidoRepository
from validation import check_vendedor_status

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("pedidos_app")


# =====================================================
# UTILITARIOS
# =====================================================
def _repo() -> PedidoRepository:
    return current_app.extensions["pedidos_repository"]


def _payload() -> dict:
    # corpo ausente ou que nao e JSON vira objeto vazio e cai na validacao
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Corpo da requisicao deve ser um objeto JSON")
    return payload


def _erro(exc: PedidoError):
    if exc.status_code >= 500:
        logger.error("Erro no servidor: %s", exc.message)
    else:
        logger.warning("Requisicao rejeitada (%s): %s", exc.status_code, exc.message)
    return jsonify({"message": exc.message}), exc.status_code


# =====================================================
# ROTAS / VIEWS
# =====================================================
def register_routes(app: Flask):
    @app.route("/health")
    def health():
        database = "ok" if _repo().ping() else "indisponivel"
        return jsonify({"status": "OK", "message": "API funcionando", "database": database})

    @app.route("/")
    def index():
        return jsonify({"message": "API do Sistema de Pedidos"})

    @app.route("/pedidos", methods=["GET"])
    def listar_pedidos():
        try:
            pedidos = _repo().list()
        except PedidoError as exc:
            return _erro(exc)
        return jsonify([pedido.to_dict() for pedido in pedidos])

    @app.route("/pedidos", methods=["POST"])
    def criar_pedido():
        try:
            payload = _payload()
            logger.info("Dados recebidos: %s", payload)
            check_vendedor_status(payload)
            pedido = _repo().create(payload)
        except PedidoError as exc:
            return _erro(exc)
        logger.info("Pedido salvo: %r", pedido)
        return jsonify(pedido.to_dict()), 201

    @app.route("/pedidos/<pedido_id>", methods=["PUT"])
    def atualizar_pedido(pedido_id):
        try:
            pedido = _repo().update(pedido_id, _payload())
        except PedidoError as exc:
            return _erro(exc)
        return jsonify(pedido.to_dict())

    @app.route("/pedidos/<pedido_id>", methods=["DELETE"])
    def excluir_pedido(pedido_id):
        try:
            _repo().delete(pedido_id)
        except PedidoError as exc:
            return _erro(exc)
        logger.info("Pedido %s excluido", pedido_id)
        return jsonify({"message": "Pedido excluído com sucesso"})

    @app.errorhandler(HTTPException)
    def http_error(exc: HTTPException):
        original = getattr(exc, "original_exception", None)
        if original is not None:
            logger.error("Erro inesperado", exc_info=original)
        return jsonify({"message": exc.description}), exc.code


# =====================================================
# APP / LOGGING / DB
# =====================================================
def create_app(config: dict | None = None, repository=None) -> Flask:
    """Monta a aplicacao.

    ``config`` sobrepoe as variaveis de ambiente e ``repository`` substitui
    o repositorio SQLAlchemy padrao (usado pelos testes).
    """
    settings = load_config(config)

    logger.setLevel(settings["LOG_LEVEL"])

    app = Flask(__name__)
    app.config.update(settings)
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    CORS(
        app,
        origins=settings["CORS_ORIGINS"],
        methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        supports_credentials=True,
    )

    db.init_app(app)
    with app.app_context():
        try:
            # cria a tabela automaticamente no banco configurado
            db.create_all()
            logger.info("Conectado ao banco de dados")
        except SQLAlchemyError:
            logger.exception("Erro ao conectar com o banco de dados")

    if repository is None:
        repository = PedidoRepository(db.session)
    app.extensions["pedidos_repository"] = repository
    register_routes(app)
    return app


if __name__ == "__main__":
    app = create_app()
    port = app.config["PORT"]
    logger.info("Servidor rodando na porta %s", port)
    app.run(host="0.0.0.0", port=port, debug=app.config["DEBUG"])
