"""Expense router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.response import DataResponse
from consignment.db.base import get_db
from consignment.schemas.expense import ExpenseCreate, ExpenseOut, ExpenseUpdate, ExpenseWithItemOut
from consignment.services.expense import ExpenseService

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.get("", response_model=DataResponse[list[ExpenseWithItemOut]])
async def list_expenses(session: AsyncSession = Depends(get_db)):
    return {"data": await ExpenseService(session).list_expenses()}


@router.get("/general", response_model=DataResponse[list[ExpenseOut]])
async def list_general_expenses(session: AsyncSession = Depends(get_db)):
    expenses = await ExpenseService(session).list_general_expenses()
    return {"data": [ExpenseOut.model_validate(e) for e in expenses]}


@router.get("/by-item/{item_id}", response_model=DataResponse[list[ExpenseOut]])
async def list_item_expenses(item_id: str, session: AsyncSession = Depends(get_db)):
    expenses = await ExpenseService(session).list_expenses_by_item(item_id)
    return {"data": [ExpenseOut.model_validate(e) for e in expenses]}


@router.post("", response_model=DataResponse[ExpenseOut], status_code=status.HTTP_201_CREATED)
async def create_expense(body: ExpenseCreate, session: AsyncSession = Depends(get_db)):
    expense = await ExpenseService(session).create_expense(body)
    return {"data": ExpenseOut.model_validate(expense)}


@router.patch("/{expense_id}", response_model=DataResponse[ExpenseOut])
async def update_expense(expense_id: str, body: ExpenseUpdate, session: AsyncSession = Depends(get_db)):
    expense = await ExpenseService(session).update_expense(expense_id, body)
    return {"data": ExpenseOut.model_validate(expense)}


@router.delete("/{expense_id}", response_model=DataResponse[ExpenseOut])
async def delete_expense(expense_id: str, session: AsyncSession = Depends(get_db)):
    expense = await ExpenseService(session).delete_expense(expense_id)
    return {"data": ExpenseOut.model_validate(expense)}
