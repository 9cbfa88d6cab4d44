from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"


# =====================================================
# MODELOS
# =====================================================
class Pedido(db.Model):
    __tablename__ = "pedidos"
    id = db.Column(db.Integer, primary_key=True)
    cliente = db.Column(db.Text, nullable=False)
    valor = db.Column(db.Float, nullable=False)
    data = db.Column(db.Text, nullable=False)
    empresa = db.Column(db.Text, nullable=False)
    # nulo apenas em registros anteriores ao campo
    vendedor = db.Column(db.Text, nullable=True)
    status = db.Column(db.Text, default="Pendente", nullable=False)
    created_at = db.Column(db.DateTime(timezone=False), default=_utcnow, nullable=False, index=True)
    updated_at = db.Column(
        db.DateTime(timezone=False), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def to_dict(self) -> dict:
        return {
            "_id": self.id,
            "id": self.id,
            "cliente": self.cliente,
            "valor": self.valor,
            "data": self.data,
            "empresa": self.empresa,
            "vendedor": self.vendedor,
            "status": self.status,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }

    def __repr__(self):
        return f"<Pedido {self.id} {self.cliente} status={self.status}>"
