"""Application services — use case orchestration."""

from crowdfund_ledger.services.campaign_registry import CampaignRegistry
from crowdfund_ledger.services.ledger_service import CrowdfundLedger
from crowdfund_ledger.services.settlement_engine import SettlementEngine
from crowdfund_ledger.services.transfer_service import SimulatedWallet

__all__ = [
    "CampaignRegistry",
    "CrowdfundLedger",
    "SettlementEngine",
    "SimulatedWallet",
]
