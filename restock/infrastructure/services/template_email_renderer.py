"""
邮件渲染服务的模板实现。
不依赖外部文本生成服务，用固定模板生成纯文本的补货订单邮件。
"""
from loguru import logger

from restock.domain.repositories import EmailRenderer
from restock.domain.value_objects import EmailDraft, EmailDraftItem, RenderedEmail

SUBJECT_TEMPLATE = "Restock Order from {store_name}"

BODY_TEMPLATE = """Hi {supplier_name} team,

We hope you're doing well! We'd like to place a restock order for the following items:

{item_list}

Please confirm availability and provide an estimated delivery time at your earliest convenience.

Thank you for your continued support.

Best regards,
{signature}"""


class TemplateEmailRenderer(EmailRenderer):
    """
    基于模板的邮件渲染服务。
    每个商品一行，格式为"• <数量>x <商品名>"，有备注时附在括号中。
    """

    def __init__(self, subject_template: str = SUBJECT_TEMPLATE, body_template: str = BODY_TEMPLATE):
        """
        初始化模板邮件渲染服务。

        Args:
            subject_template: 主题模板，可使用store_name、supplier_name
            body_template: 正文模板，可使用supplier_name、item_list、signature
        """
        self.subject_template = subject_template
        self.body_template = body_template

    async def render(self, draft: EmailDraft) -> RenderedEmail:
        """
        渲染邮件。

        Args:
            draft: 邮件草稿

        Returns:
            渲染后的邮件
        """
        subject = self.subject_template.format(
            store_name=draft.store_name,
            supplier_name=draft.supplier_name,
        )
        body = self.body_template.format(
            supplier_name=draft.supplier_name,
            item_list="\n".join(self._format_item(item) for item in draft.items),
            signature=self._format_signature(draft),
        )
        logger.debug(f"已渲染发送给 {draft.supplier_email} 的邮件，共 {len(draft.items)} 个商品")
        return RenderedEmail(subject=subject, body=body, draft=draft)

    @staticmethod
    def _format_item(item: EmailDraftItem) -> str:
        line = f"• {item.quantity}x {item.product_name}"
        if item.notes:
            line += f" ({item.notes})"
        return line

    @staticmethod
    def _format_signature(draft: EmailDraft) -> str:
        lines = [draft.sender_name, draft.store_name]
        if draft.sender_email:
            lines.append(draft.sender_email)
        return "\n".join(lines)
