MOVEMENT_TYPE_LABELS = {
    "entrada": "Entrada",
    "saida": "Saída",
    "ajuste": "Ajuste",
    "criacao": "Criação",
    "exclusao": "Exclusão",
}

MOVEMENT_TYPE_COLORS = {
    "entrada": "#d1fae5",
    "saida": "#fee2e2",
    "ajuste": "#fef3c7",
    "criacao": "#dbeafe",
    "exclusao": "#f3f4f6",
}

STATUS_LABELS = {
    "normal": "Normal",
    "baixo": "Baixo",
    "critico": "Crítico",
    "excesso": "Excesso",
}

STATUS_COLORS = {
    "normal": "#d1fae5",
    "baixo": "#fef3c7",
    "critico": "#fee2e2",
    "excesso": "#dbeafe",
}

ORDER_BY_LABELS = {
    "date_desc": "Data (mais recente)",
    "date_asc": "Data (mais antiga)",
    "product_asc": "Produto (A-Z)",
    "product_desc": "Produto (Z-A)",
}

# motif obligatoire pour ces types
REASON_REQUIRED = {"ajuste", "exclusao"}
