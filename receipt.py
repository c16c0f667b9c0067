from basket import Basket
from money import format_money
from pricing import PricingResult

HEADER = "===== 영수증 ====="
FOOTER = "=================="


def render_receipt(basket: Basket, pricing: PricingResult) -> str:
    lines = [HEADER, "품목:"]
    for item in basket.items:
        lines.append(
            f"- {item.name} {item.quantity}개 "
            f"(단가: {format_money(item.price)}원, 총액: {format_money(item.total)}원)"
        )
    lines.append(f"소계: {format_money(pricing.subtotal)}원")

    discount = f"할인: {format_money(pricing.discount)}원"
    if pricing.discount_rate:
        discount += f" ({pricing.discount_percent}% 할인)"
    lines.append(discount)

    lines.append(f"최종 결제 금액: {format_money(pricing.final_amount)}원")
    lines.append(FOOTER)
    return "\n".join(lines) + "\n"
