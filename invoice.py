"""Plain-text digital invoice for a confirmed order."""

from decimal import Decimal
from typing import Any, Dict, List

STORE_NAME = "FarmaPlus"
RULE = "=" * 40

STATUS_LABELS = {
    "pending": "Pendiente",
    "paid": "Pagado",
    "shipped": "Enviado",
    "delivered": "Entregado",
    "cancelled": "Cancelado",
}


def invoice_number(order_id: str) -> str:
    return order_id[:8].upper()


def invoice_filename(order_id: str) -> str:
    return f"factura-{invoice_number(order_id)}.txt"


def render_invoice(order: Dict[str, Any], items: List[Dict[str, Any]]) -> str:
    lines = []
    subtotal = Decimal("0")
    for item in items:
        line_total = Decimal(item["price"]) * item["quantity"]
        subtotal += line_total
        lines.append(f"{item['product_name']} x {item['quantity']} .......... ${line_total:.2f}")

    status = STATUS_LABELS.get(order.get("status"), order.get("status"))
    return "\n".join([
        f"{STORE_NAME.upper()} - FACTURA DIGITAL",
        RULE,
        f"Fecha: {order['created_at']:%d/%m/%Y}",
        f"Número de Factura: {invoice_number(order['id'])}",
        "",
        "DATOS DEL CLIENTE",
        RULE,
        f"Nombre: {order['customer_name']}",
        f"Email: {order['customer_email']}",
        f"Teléfono: {order['customer_phone']}",
        f"Dirección: {order['delivery_address']}",
        f"Ciudad: {order['delivery_city']}",
        f"Código Postal: {order['delivery_postal_code']}",
        "",
        "DETALLES DEL PEDIDO",
        RULE,
        *lines,
        "",
        f"SUBTOTAL: ${subtotal:.2f}",
        "ENVÍO: Incluido",
        f"TOTAL: ${Decimal(order['total']):.2f}",
        "",
        RULE,
        f"Estado: {status}",
        "Entrega estimada: 24-48 horas hábiles",
        "",
        f"¡Gracias por tu compra en {STORE_NAME}!",
        "",
    ])
