import logging

from sqlalchemy import text
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from errors import NotFoundError, StoreError, ValidationError
from models import Pedido
from validation import CAMPOS_EDITAVEIS, clean_order

logger = logging.getLogger("pedidos_app")

# limite da coluna INTEGER (int4 no PostgreSQL)
MAX_ID = 2**31 - 1


def _parse_id(pedido_id) -> int:
    try:
        value = int(str(pedido_id).strip())
    except (TypeError, ValueError):
        raise NotFoundError() from None
    if not 0 < value <= MAX_ID:
        raise NotFoundError()
    return value


class PedidoRepository:
    """Acesso aos pedidos atraves de uma sessao SQLAlchemy injetada.

    Toda falha do banco desfaz a sessao e sobe como ``StoreError``, exceto
    dados recusados numa escrita, que sobem como ``ValidationError``;
    erros de validacao e de pedido inexistente nunca tocam o banco.
    """

    def __init__(self, session):
        self.session = session

    def _store_error(self, exc: SQLAlchemyError, context: str) -> StoreError:
        self.session.rollback()
        logger.exception("Falha no banco ao %s", context)
        return StoreError(str(getattr(exc, "orig", None) or exc))

    def _commit_write(self, context: str) -> None:
        # dados recusados pelo banco voltam como erro de validacao
        try:
            self.session.commit()
        except (DataError, IntegrityError) as exc:
            self.session.rollback()
            logger.warning("Banco recusou os dados ao %s: %s", context, exc)
            raise ValidationError(str(getattr(exc, "orig", None) or exc)) from exc
        except SQLAlchemyError as exc:
            raise self._store_error(exc, context) from exc

    def list(self) -> list[Pedido]:
        try:
            return (
                self.session.query(Pedido)
                .order_by(Pedido.created_at.desc(), Pedido.id.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._store_error(exc, "listar pedidos") from exc

    def get(self, pedido_id) -> Pedido:
        key = _parse_id(pedido_id)
        try:
            pedido = self.session.get(Pedido, key)
        except SQLAlchemyError as exc:
            raise self._store_error(exc, "buscar pedido") from exc
        if pedido is None:
            raise NotFoundError()
        return pedido

    def create(self, fields: dict) -> Pedido:
        pedido = Pedido(**clean_order(fields))
        self.session.add(pedido)
        self._commit_write("criar pedido")
        return pedido

    def update(self, pedido_id, fields: dict) -> Pedido:
        pedido = self.get(pedido_id)
        editaveis = {campo: fields[campo] for campo in CAMPOS_EDITAVEIS if campo in fields}
        for campo, value in clean_order(editaveis, partial=True).items():
            setattr(pedido, campo, value)
        self._commit_write("atualizar pedido")
        return pedido

    def delete(self, pedido_id) -> None:
        pedido = self.get(pedido_id)
        self.session.delete(pedido)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._store_error(exc, "excluir pedido") from exc

    def ping(self) -> bool:
        try:
            self.session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Banco indisponivel")
            return False
