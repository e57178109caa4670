from decimal import Decimal, ROUND_HALF_UP


def margin_percent(revenue_cents, profit_cents):
    """Profit as a percentage of revenue, two decimals; 0 when there is no revenue"""
    if revenue_cents <= 0:
        return Decimal('0.00')
    return (Decimal(profit_cents) * 100 / Decimal(revenue_cents)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def job_cost_summary(quote, costs):
    """Projected vs actual cost, profit and margin of one job against its quote total"""
    projected = sum(cost.projected_cost_cents for cost in costs)
    actual = sum(cost.actual_cost_cents for cost in costs)
    revenue = quote.total_cents
    return {
        'quote_total_cents': revenue,
        'projected_cost_cents': projected,
        'actual_cost_cents': actual,
        'variance_cents': actual - projected,
        'projected_profit_cents': revenue - projected,
        'actual_profit_cents': revenue - actual,
        'projected_margin_percent': str(margin_percent(revenue, revenue - projected)),
        'actual_margin_percent': str(margin_percent(revenue, revenue - actual)),
    }
