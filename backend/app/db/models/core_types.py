import enum

class MovementType(str, enum.Enum):
    entrada = "entrada"
    saida = "saida"
    ajuste = "ajuste"
    criacao = "criacao"
    exclusao = "exclusao"

class StockStatus(str, enum.Enum):
    normal = "normal"
    baixo = "baixo"
    critico = "critico"
    excesso = "excesso"

class MovementOrder(str, enum.Enum):
    date_asc = "date_asc"
    date_desc = "date_desc"
    product_asc = "product_asc"
    product_desc = "product_desc"

class Permission(str, enum.Enum):
    create = "CREATE"
    read = "READ"
    update = "UPDATE"
    delete = "DELETE"
