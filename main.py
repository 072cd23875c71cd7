import logging
import sys
from functools import lru_cache
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from pay_levels import PAY_LEVELS, level_options
from schemas import ArrearCalculationRun, PayLevelOption, RateTables, Statement
from statement import ArrearCalculationError, build_statement

logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Arrear Calculator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache
def default_rate_tables() -> RateTables:
    return config.load_rate_tables()


@app.exception_handler(ArrearCalculationError)
async def calculation_failed(request: Request, exc: ArrearCalculationError):
    return JSONResponse(
        status_code=422,
        content={"detail": "Calculation failed", "reason": exc.reason},
    )


@app.get("/")
def read_root():
    return {"message": "Arrear Calculator API Running"}


@app.post("/api/arrears/calculate", response_model=Statement)
def calculate_arrears(payload: ArrearCalculationRun, defaults: RateTables = Depends(default_rate_tables)):
    rates = payload.rates if payload.rates is not None else defaults
    return build_statement(payload.request, rates)


@app.get("/api/pay-levels/{cpc}", response_model=List[PayLevelOption])
def pay_levels(cpc: str):
    if cpc not in PAY_LEVELS:
        raise HTTPException(status_code=404, detail=f"Unknown CPC: {cpc}")
    return [PayLevelOption(level=level, label=label) for level, label in level_options(cpc)]


@app.get("/api/rates", response_model=RateTables)
def rates(defaults: RateTables = Depends(default_rate_tables)):
    return defaults


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.port())
