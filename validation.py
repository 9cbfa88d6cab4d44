"""Validacao dos campos de pedido, sem depender do banco."""

import math

from errors import ValidationError

STATUS_PADRAO = "Pendente"

CAMPOS_EDITAVEIS = ("cliente", "valor", "data", "empresa", "vendedor", "status")
CAMPOS_OBRIGATORIOS = ("cliente", "valor", "data", "empresa", "vendedor")

MENSAGEM_VENDEDOR_STATUS = "Vendedor e status são obrigatórios"


def _is_empty(value) -> bool:
    return value is None or value == ""


def _coerce_text(campo: str, value):
    if isinstance(value, bool):
        raise ValueError(f"Campo {campo} deve ser texto")
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise ValueError(f"Campo {campo} deve ser texto")


def _coerce_valor(value) -> float:
    numero = None
    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            numero = float(value)
        elif isinstance(value, str):
            numero = float(value.strip().replace(",", "."))
    except (ValueError, OverflowError):
        numero = None
    if numero is None or not math.isfinite(numero):
        raise ValueError("Campo valor deve ser numerico")
    return numero


def _coerce(campo: str, value):
    if campo == "valor":
        return _coerce_valor(value)
    return _coerce_text(campo, value)


def _campos_verificados(payload: dict, partial: bool):
    if partial:
        return [campo for campo in CAMPOS_EDITAVEIS if campo in payload]
    return list(CAMPOS_OBRIGATORIOS) + ["status"]


def validate_order(payload, partial: bool = False) -> list[str]:
    """Retorna a lista de problemas encontrados no payload (vazia se valido).

    Com ``partial=True`` so os campos presentes no payload sao verificados,
    como numa atualizacao. Fora disso, ``status`` ausente e aceito porque
    recebe o valor padrao na criacao.
    """
    if not isinstance(payload, dict):
        return ["Corpo da requisicao deve ser um objeto JSON"]

    problems = []
    for campo in _campos_verificados(payload, partial):
        value = payload.get(campo)
        if _is_empty(value):
            if campo == "status" and not partial and campo not in payload:
                continue
            problems.append(f"Campo obrigatorio: {campo}")
            continue
        try:
            _coerce(campo, value)
        except ValueError as exc:
            problems.append(str(exc))
    return problems


def clean_order(payload, partial: bool = False) -> dict:
    problems = validate_order(payload, partial=partial)
    if problems:
        raise ValidationError(problems=problems)

    cleaned = {}
    for campo in CAMPOS_EDITAVEIS:
        if campo in payload:
            cleaned[campo] = _coerce(campo, payload[campo])
    if not partial:
        cleaned.setdefault("status", STATUS_PADRAO)
    return cleaned


def check_vendedor_status(payload) -> None:
    payload = payload if isinstance(payload, dict) else {}
    if not payload.get("vendedor") or not payload.get("status"):
        raise ValidationError(MENSAGEM_VENDEDOR_STATUS)
