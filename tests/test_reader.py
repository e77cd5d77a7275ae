"""Tests for the payment reader."""

import pytest
from decimal import Decimal

from sepapay.domain.errors import FieldNotFoundError, NotFoundError
from sepapay.domain.reader import PaymentReader


@pytest.fixture
def document():
    """A hand-written document in the emitted layout."""
    return {
        "GrpHdr": {
            "MsgId": "PAY-42",
            "CreDtTm": "2024-01-15T09:30:00.000Z",
            "Grpg": "MIXD",
            "InitgPty": {"Nm": "ACME Corp"},
            "NbOfTxs": 3,
            "CtrlSum": Decimal("60.00"),
        },
        "PmtInf": [
            {
                "PmtInfId": "salaries",
                "ReqdExctnDt": "2024-01-16",
                "Dbtr": {"Nm": "ACME Payroll"},
                "DbtrAgt": {"FinInstnId": {"BIC": "ACMEDEFFXXX"}},
                "DbtrAcct": {"Id": {"IBAN": "DE89370400440532013000"}, "Ccy": "EUR"},
                "CdtTrfTxInf": [
                    {
                        "PmtId": {"EndToEndId": "E2E-1"},
                        "Amt": {"InstdAmt": {"value": Decimal("10.00"), "currency": "EUR"}},
                        "CdtrAgt": {"FinInstnId": {"BIC": "COBADEFFXXX"}},
                        "Cdtr": {"Nm": "Jane Doe"},
                        "CdtrAcct": {"Id": {"IBAN": "DE44500502010000000001"}},
                        "transactionId": "t-1",
                    },
                    {
                        "PmtId": {"EndToEndId": "E2E-2"},
                        "Amt": {"InstdAmt": {"value": Decimal("20.00"), "currency": "EUR"}},
                        "Cdtr": {"Nm": "John Roe"},
                    },
                ],
            },
            {
                "PmtInfId": "suppliers",
                "DbtrAcct": {"Ccy": "CHF"},
                "CdtTrfTxInf": [
                    {
                        "PmtId": {"EndToEndId": "E2E-1"},
                        "Amt": {"InstdAmt": {"value": Decimal("30.00"), "currency": "CHF"}},
                    },
                ],
            },
        ],
    }


@pytest.fixture
def reader(document):
    return PaymentReader(document)


class TestHeader:
    """Tests for header lookups."""

    def test_header_fields(self, reader):
        assert reader.get_reference() == "PAY-42"
        assert reader.get_control_sum() == Decimal("60.00")
        assert reader.get_number_of_transactions() == 3
        assert reader.get_creation_time() == "2024-01-15T09:30:00.000Z"
        assert reader.get_initiating_party() == "ACME Corp"

    def test_missing_header_is_none(self):
        reader = PaymentReader({})
        assert reader.get_reference() is None
        assert reader.get_control_sum() is None
        assert reader.get_number_of_transactions() is None


class TestTransactionGroups:
    """Tests for group lookups."""

    def test_count_transaction_groups(self, reader):
        assert reader.count_transaction_groups() == 2
        assert reader.list_transaction_group_ids() == ["salaries", "suppliers"]

    def test_count_without_groups(self):
        assert PaymentReader({}).count_transaction_groups() == 0
        assert PaymentReader({"PmtInf": []}).count_transaction_groups() == 0

    def test_has_transaction_group(self, reader):
        assert reader.has_transaction_group("salaries")
        assert not reader.has_transaction_group("ghost")

    def test_has_transaction_group_without_groups(self):
        assert not PaymentReader({"PmtInf": []}).has_transaction_group("salaries")
        assert not PaymentReader({}).has_transaction_group("salaries")

    def test_group_fields(self, reader):
        assert reader.get_currency("salaries") == "EUR"
        assert reader.get_debtor_name("salaries") == "ACME Payroll"
        assert reader.get_debtor_bic("salaries") == "ACMEDEFFXXX"
        assert reader.get_debtor_iban("salaries") == "DE89370400440532013000"
        assert reader.get_execution_date("salaries") == "2024-01-16"

    def test_partial_group_fields_are_none(self, reader):
        assert reader.get_currency("suppliers") == "CHF"
        assert reader.get_debtor_name("suppliers") is None
        assert reader.get_debtor_bic("suppliers") is None
        assert reader.get_debtor_iban("suppliers") is None

    def test_unknown_group_fields_are_none(self, reader):
        assert reader.get_currency("ghost") is None
        assert reader.get_debtor_name("ghost") is None
        assert reader.get_debtor_bic("ghost") is None
        assert reader.get_debtor_iban("ghost") is None

    def test_first_group_match_wins(self, document):
        document["PmtInf"].append({"PmtInfId": "salaries", "DbtrAcct": {"Ccy": "USD"}})
        assert PaymentReader(document).get_currency("salaries") == "EUR"


class TestTransactions:
    """Tests for transaction lookups."""

    def test_count_transactions(self, reader):
        assert reader.count_transactions("salaries") == 2
        assert reader.count_transactions("suppliers") == 1

    def test_count_transactions_unknown_group(self, reader):
        assert reader.count_transactions("ghost") == 0

    def test_count_transactions_missing_list(self):
        reader = PaymentReader({"PmtInf": [{"PmtInfId": "bare"}]})
        assert reader.count_transactions("bare") == 0

    def test_list_transaction_references(self, reader):
        assert reader.list_transaction_references("salaries") == ["E2E-1", "E2E-2"]
        assert reader.list_transaction_references("ghost") == []

    def test_has_transaction(self, reader):
        assert reader.has_transaction("salaries", "E2E-2")
        assert not reader.has_transaction("salaries", "E2E-9")
        assert not reader.has_transaction("ghost", "E2E-1")

    def test_transaction_fields(self, reader):
        assert reader.get_transaction_amount("salaries", "E2E-1") == Decimal("10.00")
        assert reader.get_transaction_currency("salaries", "E2E-1") == "EUR"
        assert reader.get_transaction_creditor_name("salaries", "E2E-1") == "Jane Doe"
        assert reader.get_transaction_creditor_bic("salaries", "E2E-1") == "COBADEFFXXX"
        assert reader.get_transaction_creditor_iban("salaries", "E2E-1") == "DE44500502010000000001"

    def test_transaction_lookup_is_scoped_to_group(self, reader):
        """Test the same reference in two groups resolves per group."""
        assert reader.get_transaction_amount("suppliers", "E2E-1") == Decimal("30.00")
        assert reader.get_transaction_currency("suppliers", "E2E-1") == "CHF"

    def test_missing_transaction_fields_are_none(self, reader):
        assert reader.get_transaction_creditor_bic("salaries", "E2E-2") is None
        assert reader.get_transaction_amount("salaries", "E2E-9") is None
        assert reader.get_transaction_creditor_name("ghost", "E2E-1") is None


class TestCustomFields:
    """Tests for get_transaction_custom_field."""

    def test_read_custom_field(self, reader):
        assert reader.get_transaction_custom_field("salaries", "E2E-1", "transactionId") == "t-1"

    def test_read_fixed_field_by_name(self, reader):
        assert reader.get_transaction_custom_field("salaries", "E2E-2", "Cdtr") == {"Nm": "John Roe"}

    def test_absent_field_on_existing_transaction(self, reader):
        assert reader.get_transaction_custom_field("salaries", "E2E-2", "transactionId") is None

    def test_missing_transaction_raises(self, reader):
        """Test custom field lookup fails hard when the transaction is absent."""
        with pytest.raises(FieldNotFoundError) as excinfo:
            reader.get_transaction_custom_field("salaries", "E2E-9", "transactionId")

        assert isinstance(excinfo.value, NotFoundError)
        assert "E2E-9" in str(excinfo.value)
        assert "salaries" in str(excinfo.value)

    def test_missing_group_raises(self, reader):
        with pytest.raises(FieldNotFoundError):
            reader.get_transaction_custom_field("ghost", "E2E-1", "transactionId")


def test_reader_does_not_mutate_document(document):
    """Test lookups leave the wrapped document unchanged."""
    import copy

    snapshot = copy.deepcopy(document)
    reader = PaymentReader(document)
    reader.get_transaction_custom_field("salaries", "E2E-1", "transactionId")
    reader.count_transactions("ghost")
    reader.has_transaction_group("suppliers")
    assert document == snapshot
