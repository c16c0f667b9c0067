import sys
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from config import get_settings
from errors import EmptyBasket, InvalidItem, NotFound, StoreUnavailable
from models import (
    BasketDetailsResponse, BasketItemDto,
    BasketItemRequests, BasketResponse
)
from receipt import render_receipt
from service import create_basket as create_basket_in, get_basket as get_basket_from
from store import BasketStore, InMemoryBasketStore

settings = get_settings()

logger.remove()
logger.add(
    sys.stderr,
    format="{time:YYYY-MM-DD HH:mm:ss} [{level}] {name}: {message}",
    level=settings.log_level,
)

app = FastAPI(title="Shopping Basket API")

# 🔐 Allow frontend CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_store() -> BasketStore:
    if settings.basket_store == "firebase":
        from firebase_util import FirebaseBasketStore
        logger.info("Using Firebase basket store")
        return FirebaseBasketStore()
    logger.info("Using in-memory basket store")
    return InMemoryBasketStore()


# Malformed bodies are client errors like any other invalid basket
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected request body on {}: {}", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": "Invalid basket request"})


def _load(store: BasketStore, basket_id: str):
    try:
        return get_basket_from(store, basket_id, settings.currency_minor_units)
    except NotFound as e:
        logger.info("Basket lookup miss: {}", basket_id)
        raise HTTPException(status_code=404, detail=str(e))
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


# 🎯 1. CREATE BASKET
@app.post("/api/baskets", response_model=BasketResponse)
def create_basket(body: BasketItemRequests, store: BasketStore = Depends(get_store)):
    specs = [(i.name, i.price, i.quantity) for i in body.items]
    try:
        basket_id = create_basket_in(store, specs)
    except (EmptyBasket, InvalidItem) as e:
        logger.warning("Rejected basket: {}", e)
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))

    return {"basketId": basket_id}


# 🎯 2. GET BASKET WITH RECEIPT
@app.get("/api/baskets/{basket_id}", response_model=BasketDetailsResponse)
def get_basket(basket_id: str, store: BasketStore = Depends(get_store)):
    view = _load(store, basket_id)
    pricing = view.pricing

    return BasketDetailsResponse(
        basketId=basket_id,
        items=[
            BasketItemDto(name=i.name, quantity=i.quantity, price=i.price, total=i.total)
            for i in view.items
        ],
        subtotal=pricing.subtotal,
        discount=pricing.discount,
        finalAmount=pricing.final_amount,
    )


# 🎯 3. PRINTABLE RECEIPT
@app.get("/api/baskets/{basket_id}/receipt", response_class=PlainTextResponse)
def get_receipt(basket_id: str, store: BasketStore = Depends(get_store)):
    view = _load(store, basket_id)
    return render_receipt(view.basket, view.pricing)


def run():
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)  # noqa: S104


if __name__ == "__main__":
    run()
