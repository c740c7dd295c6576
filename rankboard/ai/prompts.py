from rankboard.core.config import STOCK_LIST_LIMIT, THEME_LIST_LIMIT

# --- System instruction sent with every extraction request ---
SYSTEM_INSTRUCTION = f"""
You are an expert at reading screenshots of stock-market ranking screens.
Each image is preceded by a label naming its source:
[30-second interval stock ranking / intraday cumulative stock ranking /
themes by view rank / themes by change rate].
Read each image according to its source and answer with JSON in this form:
1. extractedTime: the clock shown at the top left of the screen ("hh:mm").
2. marketStatus: {{
     kospi, kospiChange, kospiChangeAmount,
     kosdaq, kosdaqChange, kosdaqChangeAmount
   }}
3. realtimeStocks: up to {STOCK_LIST_LIMIT} stocks from the "30-second interval" source (rank, name, price, changePercent).
4. cumulativeStocks: up to {STOCK_LIST_LIMIT} stocks from the "intraday cumulative" source (rank, name, price, changePercent).
5. themesByRank: up to {THEME_LIST_LIMIT} themes from the "themes by view rank" source (name, changePercent).
6. themesByChange: up to {THEME_LIST_LIMIT} themes from the "themes by change rate" source (name, changePercent).
Note: change amounts (ChangeAmount) must keep their sign (+ or -).
""".strip()

TRAILING_INSTRUCTION = "Analyse the images precisely and produce the JSON report."


def source_caption(label: str) -> str:
    return f"Image Source [{label}]:"
