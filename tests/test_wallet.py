import pytest

from dashsave.errors import InsufficientFunds, SaveValidationError
from dashsave.state import PersistentState
from dashsave.wallet import Currency, CurrencyWallet


def test_earn_and_spend():
    state = PersistentState.fresh()
    wallet = CurrencyWallet(state)
    assert wallet.earn(Currency.SOFT, 50) == 50
    assert wallet.spend(Currency.SOFT, 20) == 30
    assert wallet.earn(Currency.PREMIUM, 4) == 4
    assert state.coins == 30
    assert state.premium == 4


def test_cannot_go_below_zero():
    state = PersistentState.fresh()
    wallet = CurrencyWallet(state)
    wallet.earn(Currency.PREMIUM, 2)
    with pytest.raises(InsufficientFunds):
        wallet.spend(Currency.PREMIUM, 3)
    assert state.premium == 2


def test_negative_amounts_rejected():
    wallet = CurrencyWallet(PersistentState.fresh())
    with pytest.raises(SaveValidationError):
        wallet.earn(Currency.SOFT, -1)
    with pytest.raises(SaveValidationError):
        wallet.spend(Currency.SOFT, -1)


def test_earn_past_int32_range_rejected():
    state = PersistentState.fresh()
    wallet = CurrencyWallet(state)
    wallet.earn(Currency.SOFT, 2 ** 31 - 10)
    with pytest.raises(SaveValidationError):
        wallet.earn(Currency.SOFT, 11)
    assert state.coins == 2 ** 31 - 10
    assert wallet.earn(Currency.SOFT, 10) == 2 ** 31 - 1
