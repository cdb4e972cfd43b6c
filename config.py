import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    # Em produção aponta para o Postgres do Supabase (postgresql://...)
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(os.getcwd(), "instance", "avelar.db"),
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
    NOME_LOJA = os.environ.get("NOME_LOJA", "Óticas Avelar")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # --- Segurança / Autenticação ---
    REQUIRE_LOGIN = os.environ.get("REQUIRE_LOGIN", "true").lower() in ("1", "true", "yes")
    # Em desenvolvimento, permitir bypass automático (faz login com 1º admin/usuário)
    DEBUG_LOGIN_BYPASS = os.environ.get("DEBUG_LOGIN_BYPASS", "false").lower() in (
        "1",
        "true",
        "yes",
    )
    ENFORCE_PASSWORD_POLICY = True
    PASSWORD_MIN_LENGTH = 8
    MAX_FAILED_LOGINS = 5
    LOCKOUT_MINUTES = 15
    SESSION_TIMEOUT_MIN = 60  # inatividade
    PASSWORD_MAX_AGE_DAYS = 180

    # --- Consulta de CEP ---
    CEP_API_URL = os.environ.get("CEP_API_URL", "https://viacep.com.br/ws/{cep}/json/")
    CEP_TIMEOUT = float(os.environ.get("CEP_TIMEOUT", "5"))

    # --- Regras de negócio ---
    ESTOQUE_ALERTA_LIMITE = 5  # dashboard: abaixo disso entra em alerta
    ESTOQUE_CRITICO_LIMITE = 2
    ORCAMENTO_VALIDADE_DIAS = 7
    # Venda finalizada gera lançamento de receita paga no financeiro
    VENDA_GERA_LANCAMENTO = os.environ.get("VENDA_GERA_LANCAMENTO", "true").lower() in (
        "1",
        "true",
        "yes",
    )
    CONTROLE_LC_DIAS_ALERTA = 30
