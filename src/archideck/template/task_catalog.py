# SPDX-License-Identifier: MIT

from archideck.model.task_definition import TaskCatalog, TaskCategory


def get_task_catalog_template() -> TaskCatalog:
    """Default task catalog written on first run."""
    return {
        "tasks": [
            {"key": "hearing", "name": "初回ヒアリング", "category": TaskCategory.DESIGN},
            {"key": "area_check", "name": "面積チェック", "category": TaskCategory.DESIGN},
            {"key": "evoltz_equivalent", "name": "evoltz相当", "category": TaskCategory.DESIGN},
            {"key": "layout_proposal", "name": "間取提案", "category": TaskCategory.DESIGN},
            {"key": "estimate", "name": "見積作成", "category": TaskCategory.DESIGN},
            {"key": "detail_design", "name": "実施設計", "category": TaskCategory.DESIGN},
            {"key": "structural_calc", "name": "構造計算", "category": TaskCategory.DESIGN},
            {"key": "ic_meeting", "name": "IC打合せ", "category": TaskCategory.IC},
            {"key": "lighting_plan", "name": "照明計画", "category": TaskCategory.IC},
            {"key": "curtain_order", "name": "カーテン発注", "category": TaskCategory.IC},
            {"key": "ic_final_check", "name": "IC最終確認", "category": TaskCategory.IC},
            {"key": "exterior_plan", "name": "外構プラン", "category": TaskCategory.EXTERIOR},
            {"key": "exterior_estimate", "name": "外構見積", "category": TaskCategory.EXTERIOR},
            {"key": "foundation", "name": "基礎着工", "category": TaskCategory.CONSTRUCTION},
            {"key": "framing", "name": "上棟", "category": TaskCategory.CONSTRUCTION},
            {"key": "completion_inspection", "name": "完了検査", "category": TaskCategory.CONSTRUCTION},
            {"key": "handover", "name": "引渡し", "category": TaskCategory.CONSTRUCTION},
        ]
    }
