class PedidoError(Exception):
    status_code = 500

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message()
        super().__init__(self.message)

    def default_message(self) -> str:
        return "Erro interno"


class ValidationError(PedidoError, ValueError):
    status_code = 400

    def __init__(self, message: str | None = None, problems: list[str] | None = None):
        self.problems = list(problems or [])
        if message is None and self.problems:
            message = "; ".join(self.problems)
        super().__init__(message)

    def default_message(self) -> str:
        return "Dados do pedido invalidos"


class NotFoundError(PedidoError, LookupError):
    status_code = 404

    def default_message(self) -> str:
        return "order not found"


class StoreError(PedidoError):
    status_code = 500
