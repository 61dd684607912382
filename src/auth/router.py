from fastapi import APIRouter, Depends, status
from fastapi_users.exceptions import InvalidPasswordException, UserAlreadyExists
from sqlalchemy.exc import IntegrityError

from typing_extensions import Annotated
from logging import getLogger

from auth.auth import UserManager, get_user_manager
from auth.schemas import SignInRequest, SignUpRequest, UserCreate, UserPayload
from auth.tokens import Identity, TokenCodec, get_token_codec
from api_responses import Err, ErrorKind, Ok, respond
from api_responses.errors import classify

logger = getLogger('users_router')

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.post("/signup")
async def sign_up(body: SignUpRequest,
                  user_manager: Annotated[UserManager, Depends(get_user_manager)]):
    """Creates an account."""
    try:
        user_create = UserCreate(
            email=body.email,
            password=body.password,
            first_name=body.first_name,
            last_name=body.last_name,
        )
        user = await user_manager.create(user_create, safe=True)
        payload = UserPayload.model_validate(user, from_attributes=True)
        result = Ok(payload.model_dump(by_alias=True))
    except (UserAlreadyExists, InvalidPasswordException) as e:
        result = classify(e)
    except IntegrityError:
        # a concurrent signup for the same e-mail won the unique index
        logger.debug(f"Duplicate signup for {body.email} rejected by the database")
        result = classify(UserAlreadyExists())
    except Exception as e:
        logger.warning(e)
        result = classify(e)
    return respond(result, status.HTTP_201_CREATED, "User created")


@router.post("/signin")
async def sign_in(body: SignInRequest,
                  user_manager: Annotated[UserManager, Depends(get_user_manager)],
                  codec: Annotated[TokenCodec, Depends(get_token_codec)]):
    """Issues an access token for valid credentials."""
    try:
        user = await user_manager.sign_in(body.email, body.password)
        if user is None:
            result = Err(ErrorKind.INVALID_CREDENTIALS, "Invalid credentials")
        else:
            identity = Identity(user_id=str(user.id), email=user.email,
                                first_name=user.first_name, last_name=user.last_name)
            payload = UserPayload.model_validate(user, from_attributes=True)
            result = Ok({
                "token": codec.mint(identity),
                "tokenType": "Bearer",
                "expiresIn": codec.lifetime_seconds,
                "user": payload.model_dump(by_alias=True),
            })
    except Exception as e:
        logger.warning(e)
        result = classify(e)
    return respond(result, status.HTTP_200_OK, "Signed in")
