from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from config.settings import JWT_SECRET, JWT_ALGORITHM
from app.schemas.auth_schema import AuthContext

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

def get_auth_context(token: str = Depends(oauth2_scheme)) -> AuthContext:
    # O token já foi emitido e verificado pelo provedor de identidade;
    # aqui só extraímos o escopo (papel, usuário, creche, unidade).
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Token inválido")

    return AuthContext(
        role=str(payload.get("role") or ""),
        user_doc_id=str(payload.get("userDocId") or payload.get("sub") or ""),
        daycare_id=payload.get("daycareId"),
        location_id=payload.get("locationId"),
    )
