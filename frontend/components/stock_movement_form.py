from __future__ import annotations

from typing import Any, Callable

import streamlit as st

from frontend.labels import MOVEMENT_TYPE_LABELS, REASON_REQUIRED

MAX_LENGTHS = {
    "reason": 255,
    "referenceDocument": 50,
    "batchNumber": 30,
    "location": 50,
}


def validate_form(values: dict[str, Any]) -> dict[str, str]:
    """Mêmes contraintes que l'API, plus quantité non nulle et motif pour ajuste/exclusao."""
    errors: dict[str, str] = {}

    id_product = values.get("idProduct")
    if not id_product or int(id_product) <= 0:
        errors["idProduct"] = "Produto é obrigatório"

    movement_type = values.get("movementType")
    if movement_type not in MOVEMENT_TYPE_LABELS:
        errors["movementType"] = "Tipo de movimentação é obrigatório"

    quantity = values.get("quantity")
    if quantity is None or float(quantity) == 0:
        errors["quantity"] = "Quantidade não pode ser zero"

    if movement_type in REASON_REQUIRED and not (values.get("reason") or "").strip():
        errors["reason"] = "Motivo é obrigatório para este tipo"

    for field, limit in MAX_LENGTHS.items():
        if len(values.get(field) or "") > limit:
            errors[field] = f"Máximo de {limit} caracteres"

    unit_cost = values.get("unitCost")
    if unit_cost is not None and float(unit_cost) <= 0:
        errors["unitCost"] = "Custo unitário deve ser positivo"

    return errors


def render_stock_movement_form(
    on_submit: Callable[[dict[str, Any]], None],
    on_cancel: Callable[[], None] | None = None,
    is_submitting: bool = False,
) -> None:
    with st.form("stock_movement_form", clear_on_submit=False):
        c1, c2 = st.columns(2)
        id_product = c1.number_input("Produto *", min_value=0, step=1, value=0, disabled=is_submitting)
        movement_type = c2.selectbox(
            "Tipo de Movimentação *",
            options=list(MOVEMENT_TYPE_LABELS),
            format_func=MOVEMENT_TYPE_LABELS.get,
            index=None,
            placeholder="Selecione...",
            disabled=is_submitting,
        )
        quantity = c1.number_input("Quantidade *", step=0.01, value=0.0, format="%.2f", disabled=is_submitting)
        reference_document = c2.text_input("Documento de Referência", max_chars=50, disabled=is_submitting)
        batch_number = c1.text_input("Número do Lote", max_chars=30, disabled=is_submitting)
        expiration_date = c2.date_input("Data de Validade", value=None, format="DD/MM/YYYY", disabled=is_submitting)
        location = c1.text_input("Localização", max_chars=50, disabled=is_submitting)
        unit_cost = c2.number_input("Custo Unitário", min_value=0.0, step=0.01, value=None, format="%.2f", disabled=is_submitting)
        reason = st.text_area("Motivo (obrigatório para ajuste e exclusão)", max_chars=255, disabled=is_submitting)

        b1, b2 = st.columns([1, 5])
        submitted = b1.form_submit_button("Salvando..." if is_submitting else "Salvar", disabled=is_submitting)
        cancelled = b2.form_submit_button("Cancelar", disabled=is_submitting) if on_cancel else False

    if cancelled and on_cancel:
        on_cancel()
        return

    if not submitted:
        return

    values = {
        "idProduct": int(id_product),
        "movementType": movement_type,
        "quantity": quantity,
        "reason": reason.strip() or None,
        "referenceDocument": reference_document.strip() or None,
        "batchNumber": batch_number.strip() or None,
        "expirationDate": expiration_date,
        "location": location.strip() or None,
        "unitCost": unit_cost,
    }
    errors = validate_form(values)
    if errors:
        for message in errors.values():
            st.error(message)
        return

    on_submit(values)
