# backend/routes/auth.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import create_access_token, get_current_user
from schemas import user as schemas
from storage import DatabaseStorage, get_storage

router = APIRouter(prefix="/api", tags=["Auth"])
logger = logging.getLogger(__name__)

# Register a new customer account
@router.post("/register", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserCreate, store: DatabaseStorage = Depends(get_storage)):
    # Normalize input
    username = user.username.strip()
    email = user.email.strip().lower()

    # Friendlier messages than the raw constraint error
    if store.get_user_by_username(username):
        raise HTTPException(status_code=400, detail="Username already taken")
    if store.get_user_by_email(email):
        raise HTTPException(status_code=400, detail="Email already registered")

    new_user = store.create_user(schemas.UserInsert(
        username=username,
        email=email,
        password=get_password_hash(user.password),
        role="user",
    ))
    logger.info("Registered user %s", new_user.username)
    return new_user


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.UserLogin, store: DatabaseStorage = Depends(get_storage)):
    db_user = store.get_user_credentials(payload.username)

    if not db_user or not verify_password(payload.password, db_user.password):
        logger.warning("Failed login for %s", payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = create_access_token(data={"sub": db_user.username, "role": db_user.role})
    return {"access_token": access_token, "token_type": "bearer"}


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: schemas.UserResponse = Depends(get_current_user)):
    return current_user
