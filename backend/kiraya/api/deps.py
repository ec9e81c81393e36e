from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError
from kiraya.db.session import SessionLocal
from kiraya.core.security import decode_token

bearer = HTTPBearer()

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def current_user(creds: HTTPAuthorizationCredentials = Depends(bearer)):
    try:
        return decode_token(creds.credentials)
    except PyJWTError:
        raise HTTPException(status_code=401, detail="invalid_token")
